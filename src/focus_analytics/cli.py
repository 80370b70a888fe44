"""
CLI entry point for Focus Analytics.

PURPOSE: Command-line interface for reports, manual entries and the API server.
AI CONTEXT: Main entry points for package execution.

USAGE:
    # Print today's report (default)
    python -m focus_analytics

    # Or via CLI command (after install)
    focus-analytics report --date 2026-10-18
    focus-analytics add --date 2026-10-18 --start 09:00 --end 09:25 --tag work
    focus-analytics tags
    focus-analytics dashboard --port 8080
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from functools import lru_cache
from typing import TYPE_CHECKING

from .config import Config

if TYPE_CHECKING:
    from .statistics import AnalyticsEngine
    from .storage import SessionStore


@lru_cache(maxsize=1)
def _get_logger() -> logging.Logger:
    """Get module logger (cached for thread safety)."""
    logging.basicConfig(level=logging.INFO)
    return logging.getLogger(__name__)


def _log(message: str, *, emoji: str = "") -> None:
    """Log message with optional emoji prefix for CLI output.

    Args:
        message: The message to log.
        emoji: Optional emoji prefix for visual CLI feedback.
    """
    prefix = f"{emoji} " if emoji else ""
    _get_logger().info(f"{prefix}{message}")


def _error(message: str) -> int:
    """Log an input error and return the failure exit code."""
    _get_logger().error(f"❌ {message}")
    return 1


def _parse_date(value: str | None) -> date:
    """
    Parse a --date value, defaulting to today.

    Raises:
        ValueError: If the value is not YYYY-MM-DD.
    """
    if value is None:
        return date.today()
    return date.fromisoformat(value)


def run_dashboard(host: str = Config.DEFAULT_HOST, port: int = Config.DEFAULT_PORT) -> None:
    """
    Launch the JSON API server.

    Args:
        host: Network interface to bind to. Default '127.0.0.1'.
        port: TCP port for the HTTP server. Default 8000.

    Returns:
        None. Blocks until server shutdown (Ctrl+C).

    Raises:
        OSError: If port is already in use.

    Example:
        >>> # focus-analytics dashboard --port 3000
        >>> run_dashboard(port=3000)
        🚀 Starting API at http://127.0.0.1:3000
    """
    from .web import run_dashboard as start_web

    _log(f"Starting API at http://{host}:{port}", emoji="🚀")
    _log("Press Ctrl+C to stop")
    start_web(host=host, port=port)


def run_report(
    day: date | None = None,
    store: SessionStore | None = None,
    engine: AnalyticsEngine | None = None,
) -> None:
    """
    Print the text analytics report to stdout.

    Business context: The same numbers as the API for people who live in
    the terminal; output can be piped or redirected.

    Args:
        day: Report date. Default: today. A past date is reported as of
            the current wall-clock time on that day.
        store: Optional SessionStore for testability.
        engine: Optional AnalyticsEngine for testability.
    """
    from .statistics import AnalyticsEngine as Engine
    from .storage import SessionStore as Store

    store = store or Store()
    engine = engine or Engine()
    now = datetime.now()
    if day is not None:
        now = datetime.combine(day, now.time())

    report = engine.generate_summary_report(now, store.get_sessions_for_date, store.load_tags())
    # Note: Using print() intentionally for stdout piping support
    print(report)


def run_add(
    day: date,
    start_time: str,
    end_time: str,
    session_type: str = "focus",
    tags: list[str] | None = None,
    store: SessionStore | None = None,
) -> bool:
    """
    Record a manual session.

    Args:
        day: Calendar day of the session.
        start_time: "HH:MM" start.
        end_time: "HH:MM" end; must be after start.
        session_type: One of Config.SESSION_TYPES.
        tags: Tag ids.
        store: Optional SessionStore for testability.

    Returns:
        True if the session was written.

    Raises:
        ValueError: On an invalid time, type, or an end not after start.
    """
    from .bucketing import time_to_minutes
    from .models import Session
    from .storage import SessionStore as Store

    if session_type not in Config.SESSION_TYPES:
        raise ValueError(f"Unknown session type: {session_type!r}")
    if time_to_minutes(end_time) <= time_to_minutes(start_time):
        raise ValueError(f"End time {end_time} must be after start time {start_time}")

    store = store or Store()
    known = {tag.id for tag in store.load_tags()}
    for tag_id in tags or []:
        if tag_id not in known:
            _get_logger().warning(f"Tag {tag_id!r} is not in the catalog")

    session = Session.create(day.isoformat(), start_time, end_time, session_type, list(tags or []))
    if not store.add_session(session):
        return False
    _log(
        f"Recorded {session.duration_minutes} min {session_type} session on {session.date}",
        emoji="✅",
    )
    return True


def run_tags(store: SessionStore | None = None) -> None:
    """Print the tag catalog, one tag per line."""
    from .storage import SessionStore as Store

    store = store or Store()
    tags = store.load_tags()
    if not tags:
        print("No tags defined")
        return
    for tag in tags:
        print(f"{tag.id}\t{tag.name}\t{tag.color}")


def main() -> int:
    """
    Main CLI entry point for Focus Analytics.

    Subcommands:
    - report [--date DATE]: Print text analytics report (default)
    - add --date --start --end [--type] [--tag ...]: Record a session
    - tags: List the tag catalog
    - dashboard [--host HOST] [--port PORT]: Launch the JSON API

    Returns:
        Exit code 0 for success, 1 for invalid input or a failed write.

    Raises:
        SystemExit: On --help or argument parsing errors.

    Example:
        >>> # focus-analytics report --date 2026-10-18
        >>> sys.exit(main())
    """
    from .__version__ import __version__

    parser = argparse.ArgumentParser(
        prog="focus-analytics",
        description="Focus Analytics - Focus time distribution and trend reports",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Report command
    report_parser = subparsers.add_parser(
        "report",
        help="Print analytics report to stdout",
    )
    report_parser.add_argument(
        "--date",
        default=None,
        help="Report date as YYYY-MM-DD (default: today)",
    )

    # Add command
    add_parser = subparsers.add_parser(
        "add",
        help="Record a session manually",
    )
    add_parser.add_argument("--date", default=None, help="Session date (default: today)")
    add_parser.add_argument("--start", required=True, help="Start time as HH:MM")
    add_parser.add_argument("--end", required=True, help="End time as HH:MM")
    add_parser.add_argument(
        "--type",
        default="focus",
        choices=sorted(Config.SESSION_TYPES),
        help="Session type (default: focus)",
    )
    add_parser.add_argument(
        "--tag",
        action="append",
        default=[],
        help="Tag id (repeatable)",
    )

    # Tags command
    subparsers.add_parser(
        "tags",
        help="List the tag catalog",
    )

    # Dashboard command
    dashboard_parser = subparsers.add_parser(
        "dashboard",
        help="Launch the JSON API server",
    )
    dashboard_parser.add_argument(
        "--host",
        default=Config.DEFAULT_HOST,
        help=f"Bind address (default: {Config.DEFAULT_HOST})",
    )
    dashboard_parser.add_argument(
        "--port",
        type=int,
        default=Config.DEFAULT_PORT,
        help=f"Port number (default: {Config.DEFAULT_PORT})",
    )

    args = parser.parse_args()

    if args.command == "dashboard":
        run_dashboard(host=args.host, port=args.port)
    elif args.command == "add":
        try:
            day = _parse_date(args.date)
            written = run_add(day, args.start, args.end, args.type, args.tag)
        except ValueError as e:
            return _error(str(e))
        if not written:
            return _error("Failed to write session")
    elif args.command == "tags":
        run_tags()
    else:
        # Default: report for today
        try:
            day = _parse_date(getattr(args, "date", None))
        except ValueError as e:
            return _error(str(e))
        run_report(day)

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
