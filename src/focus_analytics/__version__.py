"""Version information for focus-analytics."""

__version__ = "0.4.0"
__version_date__ = "2026-10-18"

__title__ = "focus_analytics"
__description__ = "Time-distribution and trend analytics for focused-work sessions"
__url__ = "https://github.com/focus-analytics/focus-analytics"

__author__ = "Focus Analytics Contributors"

__license__ = "MIT"
__copyright__ = "Copyright 2026 Focus Analytics Contributors"

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__url__",
    "__author__",
    "__license__",
    "__copyright__",
]
