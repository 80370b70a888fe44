"""
Web API module for Focus Analytics.

PURPOSE: FastAPI-based JSON API over the analytics presenters.
AI CONTEXT: Requires fastapi and uvicorn.

FEATURES:
- Peak hour / weekday averages with axis scales
- Trend cards with fair "up to now" comparison
- Per-period distributions and tag shares
- Weekly summary and text report

USAGE:
    # Via CLI
    focus-analytics dashboard

    # Programmatically
    from focus_analytics.web import create_app
    app = create_app()
    # Run with uvicorn
"""

from .app import create_app, run_dashboard

__all__ = ["create_app", "run_dashboard"]
