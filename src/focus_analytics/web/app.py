"""
FastAPI application for Focus Analytics.

PURPOSE: Main application factory and server runner.
AI CONTEXT: Creates app with all API routes registered.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ..__version__ import __version__
from ..config import Config
from .routes import router

__all__ = ["create_app", "run_dashboard"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:  # noqa: ARG001
    """
    Log application startup and shutdown.

    Args:
        app: The FastAPI application instance (provided by FastAPI).

    Yields:
        None. Control returns to FastAPI to handle requests.
    """
    logger.info("Focus Analytics API starting (v%s), storage: %s", __version__, Config.get_storage_dir())
    yield
    logger.info("Focus Analytics API shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Uses the application factory pattern so tests get a fresh app and
    uvicorn can build one per worker.

    Returns:
        FastAPI application with the /api routes registered and OpenAPI
        documentation at /docs.

    Example:
        >>> from fastapi.testclient import TestClient
        >>> client = TestClient(create_app())
        >>> client.get('/api/health').json()['status']
        'ok'
    """
    app = FastAPI(
        title="Focus Analytics",
        description="Focus time distribution and trend analytics",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


def run_dashboard(
    host: str = Config.DEFAULT_HOST,
    port: int = Config.DEFAULT_PORT,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """
    Launch the Focus Analytics API server.

    Args:
        host: Network interface to bind. '127.0.0.1' for local-only access.
        port: TCP port for the HTTP server. Default 8000.
        reload: Enable auto-reload on code changes for development.
        log_level: Uvicorn logging verbosity.

    Returns:
        None. Blocks until the server is stopped (Ctrl+C).

    Raises:
        OSError: If the port is already in use or host is invalid.
    """
    uvicorn.run(
        "focus_analytics.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
