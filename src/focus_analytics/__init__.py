"""
Focus Analytics.

PURPOSE: Turn focused-work session records into distributions, peaks, trends
and tag shares.
AI CONTEXT: The analytics core is pure; storage, web and CLI are thin hosts.

PACKAGE STRUCTURE:
- bucketing.py: Interval-to-bucket decomposition
- scaling.py: Nice axis selection
- aggregation.py: Windowed averages and peak detection
- trends.py: Multi-period comparisons
- tags.py: Tag duration shares
- statistics.py: AnalyticsEngine facade and text report
- models.py: Session, Tag and output records
- storage.py: JSON session store
- presenters.py: View models for the dashboard API
- web/: FastAPI JSON API
- config.py: Configuration constants

QUICK START:
    # Print a report for today
    focus-analytics report

    # Record a session
    focus-analytics add --start 09:00 --end 09:25 --tag work

    # Serve the JSON API
    focus-analytics dashboard
"""

from focus_analytics.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __url__,
    __version__,
    __version_date__,
)

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
