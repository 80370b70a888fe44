"""
Configuration for Focus Analytics.

PURPOSE: Centralized configuration constants and runtime settings.
AI CONTEXT: All configurable values live here - modify this file to change behavior.

CONFIGURATION CATEGORIES:
- Storage: File paths and directory structure
- Session Types: Valid session types and the productive subset
- Bucketing: Minute resolution of hour/day buckets
- Scaling: Axis constants for the chart scaling policies
- Tags: Untagged sentinel and legend truncation
- Web: Default dashboard host and port

ENVIRONMENT VARIABLES:
- FOCUS_ANALYTICS_DIR: Storage directory (default: .focus_analytics)
- FOCUS_ANALYTICS_TREND_PERIODS: Number of compared trend periods (default: 3)

USAGE:
    from focus_analytics.config import Config
    storage_dir = Config.get_storage_dir()
    productive = Config.filter_productive_sessions(sessions)
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .models import Session


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for Focus Analytics.

    DESIGN: Frozen dataclass ensures configuration immutability at runtime.
    All values are class-level constants - no instance creation needed.

    STORAGE STRUCTURE:
        .focus_analytics/
        ├── sessions.json  # Dict: ISO date -> [session records]
        └── tags.json      # List: tag catalog records
    """

    # =========================================================================
    # STORAGE CONFIGURATION
    # =========================================================================
    STORAGE_DIR: ClassVar[str] = ".focus_analytics"
    SESSIONS_FILE: ClassVar[str] = "sessions.json"
    TAGS_FILE: ClassVar[str] = "tags.json"

    # =========================================================================
    # SESSION TYPE CONSTANTS
    # =========================================================================
    SESSION_TYPES: ClassVar[frozenset[str]] = frozenset(
        {
            "focus",
            "custom",
            "break",
            "longBreak",
        }
    )

    PRODUCTIVE_TYPES: ClassVar[frozenset[str]] = frozenset({"focus", "custom"})
    """
    Session types counted as productive time.
    break/longBreak: Rest time, excluded from every analytic.
    """

    # =========================================================================
    # BUCKETING
    # =========================================================================
    MINUTES_PER_HOUR: ClassVar[int] = 60
    MINUTES_PER_DAY: ClassVar[int] = 24 * 60
    HOURS_PER_DAY: ClassVar[int] = 24
    DAYS_PER_WEEK: ClassVar[int] = 7
    MONTHS_PER_YEAR: ClassVar[int] = 12
    TRAILING_WINDOW_DAYS: ClassVar[int] = 7

    # =========================================================================
    # SCALING
    # =========================================================================
    DAILY_AXIS_MAX: ClassVar[int] = 60
    """Fixed axis cap of the daily hour chart: one hour holds at most 60 minutes."""

    BAR_MIN_SCALE: ClassVar[int] = 20
    """Smallest axis maximum the bar-distribution policy rounds up to."""

    # =========================================================================
    # TAGS
    # =========================================================================
    UNTAGGED_ID: ClassVar[str] = "untagged"
    UNTAGGED_NAME: ClassVar[str] = "Untagged"
    UNTAGGED_ICON: ClassVar[str] = "ri-price-tag-line"
    UNTAGGED_COLOR: ClassVar[str] = "#6b7280"
    OTHERS_ICON: ClassVar[str] = "ri-more-line"
    LEGEND_TOP_N: ClassVar[int] = 5

    # =========================================================================
    # TRENDS
    # =========================================================================
    TREND_UNITS: ClassVar[tuple[str, ...]] = ("day", "week", "month", "year")
    DEFAULT_TREND_PERIODS: ClassVar[int] = 3

    # =========================================================================
    # WEB
    # =========================================================================
    DEFAULT_HOST: ClassVar[str] = "127.0.0.1"
    DEFAULT_PORT: ClassVar[int] = 8000

    # =========================================================================
    # ENVIRONMENT-BASED SETTINGS (runtime configurable)
    # =========================================================================
    _storage_dir_override: ClassVar[str | None] = None
    _trend_periods_override: ClassVar[int | None] = None

    @classmethod
    def get_storage_dir(cls) -> str:
        """
        Get the directory holding sessions.json and tags.json.

        Resolution order: test override, then the FOCUS_ANALYTICS_DIR
        environment variable, then STORAGE_DIR relative to the working
        directory.

        Returns:
            Storage directory path string.

        Example:
            >>> Config.get_storage_dir()
            '.focus_analytics'
        """
        if cls._storage_dir_override is not None:
            return cls._storage_dir_override
        return os.environ.get("FOCUS_ANALYTICS_DIR", cls.STORAGE_DIR)

    @classmethod
    def get_trend_periods(cls) -> int:
        """
        Get how many periods a trend card compares (current plus history).

        Resolution order: test override, then FOCUS_ANALYTICS_TREND_PERIODS,
        then DEFAULT_TREND_PERIODS. Non-numeric or non-positive environment
        values fall back to the default.

        Returns:
            Number of periods, at least 1.

        Example:
            >>> # With env var: FOCUS_ANALYTICS_TREND_PERIODS=4
            >>> Config.get_trend_periods()
            4
        """
        if cls._trend_periods_override is not None:
            return cls._trend_periods_override
        raw = os.environ.get("FOCUS_ANALYTICS_TREND_PERIODS", "")
        try:
            value = int(raw)
        except ValueError:
            return cls.DEFAULT_TREND_PERIODS
        return value if value > 0 else cls.DEFAULT_TREND_PERIODS

    @classmethod
    def set_test_overrides(
        cls,
        storage_dir: str | None = None,
        trend_periods: int | None = None,
    ) -> None:
        """
        Set test overrides for environment-based settings.

        Must be paired with reset_test_overrides() in teardown so other
        tests see the environment again.

        Args:
            storage_dir: Override for the storage directory. None to clear.
            trend_periods: Override for the trend period count. None to clear.
        """
        cls._storage_dir_override = storage_dir
        cls._trend_periods_override = trend_periods

    @classmethod
    def reset_test_overrides(cls) -> None:
        """Clear all test overrides so settings come from the environment."""
        cls._storage_dir_override = None
        cls._trend_periods_override = None

    @classmethod
    def is_productive(cls, session_type: str) -> bool:
        """Return True when a session type counts toward analytics."""
        return session_type in cls.PRODUCTIVE_TYPES

    @classmethod
    def filter_productive_sessions(cls, sessions: Iterable[Session]) -> list[Session]:
        """
        Filter sessions to the types counted by every analytic.

        Business context: Break time is tracked by the timer but must never
        inflate focus totals, peaks or tag shares.

        Args:
            sessions: Session records of any type.

        Returns:
            New list holding only focus and custom sessions, in input order.

        Example:
            >>> productive = Config.filter_productive_sessions(sessions)
            >>> {s.type for s in productive} <= {'focus', 'custom'}
            True
        """
        return [s for s in sessions if cls.is_productive(s.type)]
