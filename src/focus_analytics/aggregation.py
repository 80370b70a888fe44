"""
Period aggregation for Focus Analytics.

PURPOSE: Average bucketed focus minutes over a multi-day window and find the
peak bucket; build the per-period bar-chart series.
AI CONTEXT: Pure data processing - sessions come from a caller-supplied
lookup, nothing is cached between calls.

WINDOW POLICIES:
- Trailing window: last 7 calendar days including today (weekly peak)
- Calendar month: 1st through last day of a month (monthly peak)
Both share the averaging core; only the day-set generator differs.

AVERAGING RULE:
The divisor is the number of days in the window, not the number of days
with data. An idle day lowers the average like it should.

PEAK RULE:
The bucket with the strictly greatest average; ties go to the lowest index.

USAGE:
    days = trailing_window_days(date.today())
    result = average_by_hour(days, store.get_sessions_for_date)
    result.peak_index  # e.g. 9
"""

from __future__ import annotations

import calendar
from collections.abc import Callable, Sequence
from datetime import date, timedelta

from .bucketing import bucketize_interval, hourly_distribution, session_interval
from .config import Config
from .models import PeakResult, Session

__all__ = [
    "SessionLookup",
    "DISTRIBUTION_KINDS",
    "trailing_window_days",
    "calendar_month_days",
    "week_days",
    "day_total_minutes",
    "find_peak",
    "average_by_hour",
    "weekly_peak_hour",
    "monthly_peak_hour",
    "average_by_weekday",
    "period_distribution",
]

SessionLookup = Callable[[date], Sequence[Session]]
"""Session Store lookup: all sessions (any type) dated on the given day."""

DISTRIBUTION_KINDS: tuple[str, ...] = ("daily", "weekly", "monthly", "yearly")


def trailing_window_days(today: date, length: int = Config.TRAILING_WINDOW_DAYS) -> list[date]:
    """
    Days of a trailing window ending today, oldest first.

    Example:
        >>> trailing_window_days(date(2026, 10, 18), 3)
        [datetime.date(2026, 10, 16), datetime.date(2026, 10, 17), datetime.date(2026, 10, 18)]
    """
    return [today - timedelta(days=i) for i in range(length - 1, -1, -1)]


def calendar_month_days(year: int, month: int) -> list[date]:
    """Every day of a calendar month, 1st first."""
    _, days_in_month = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, days_in_month + 1)]


def week_days(anchor: date) -> list[date]:
    """Monday through Sunday of the calendar week containing anchor."""
    monday = anchor - timedelta(days=anchor.weekday())
    return [monday + timedelta(days=i) for i in range(Config.DAYS_PER_WEEK)]


def day_total_minutes(day: date, sessions_for_date: SessionLookup) -> int:
    """Sum of duration_minutes of the day's productive sessions."""
    sessions = Config.filter_productive_sessions(sessions_for_date(day))
    return sum(max(0, s.duration_minutes) for s in sessions)


def find_peak(values: Sequence[float]) -> tuple[int, float]:
    """
    Locate the strictly greatest value, preferring the lowest index on ties.

    Args:
        values: Bucket series.

    Returns:
        Tuple (index, value). (0, 0.0) for an empty series.

    Example:
        >>> find_peak([1.0, 5.0, 5.0, 2.0])
        (1, 5.0)
    """
    peak_index, peak_value = 0, 0.0
    for index, value in enumerate(values):
        if index == 0 or value > peak_value:
            peak_index, peak_value = index, value
    return peak_index, float(peak_value)


def average_by_hour(days: Sequence[date], sessions_for_date: SessionLookup) -> PeakResult:
    """
    Average focus minutes per hour of day across a window of days.

    Each productive session is split over the hours it overlaps, summed into
    24 slots across all days, then divided by len(days).

    Business context: Answers "what hour am I usually most focused". Using
    the full window as divisor keeps a single busy day from dominating.

    Args:
        days: The window's calendar days. Days without sessions still count.
        sessions_for_date: Session Store lookup.

    Returns:
        PeakResult with 24 averages, the peak hour and its average.

    Example:
        >>> # One 60-minute session at 09:00 within seven days
        >>> result = average_by_hour(trailing_window_days(today), lookup)
        >>> round(result.averages[9], 3)
        8.571
    """
    sums = [0.0] * Config.HOURS_PER_DAY
    for day in days:
        for session in Config.filter_productive_sessions(sessions_for_date(day)):
            start, end = session_interval(session)
            for hour, minutes in bucketize_interval(start, end).items():
                sums[hour] += minutes

    divisor = len(days)
    averages = [total / divisor for total in sums] if divisor else sums
    peak_index, peak_value = find_peak(averages)
    return PeakResult(averages=averages, peak_index=peak_index, peak_value=peak_value)


def weekly_peak_hour(today: date, sessions_for_date: SessionLookup) -> PeakResult:
    """Peak hour averaged over the trailing 7 days including today."""
    return average_by_hour(trailing_window_days(today), sessions_for_date)


def monthly_peak_hour(year: int, month: int, sessions_for_date: SessionLookup) -> PeakResult:
    """Peak hour averaged over every day of a calendar month."""
    return average_by_hour(calendar_month_days(year, month), sessions_for_date)


def average_by_weekday(days: Sequence[date], sessions_for_date: SessionLookup) -> PeakResult:
    """
    Average focus minutes per weekday (Mon=0 .. Sun=6) across a window.

    Each weekday's total is divided by how many times that weekday occurs
    in the window, so a month with five Mondays is not biased toward Monday.

    Args:
        days: The window's calendar days.
        sessions_for_date: Session Store lookup.

    Returns:
        PeakResult with 7 averages and the peak weekday.
    """
    sums = [0.0] * Config.DAYS_PER_WEEK
    occurrences = [0] * Config.DAYS_PER_WEEK
    for day in days:
        weekday = day.weekday()
        occurrences[weekday] += 1
        sums[weekday] += day_total_minutes(day, sessions_for_date)

    averages = [
        total / count if count else 0.0 for total, count in zip(sums, occurrences, strict=True)
    ]
    peak_index, peak_value = find_peak(averages)
    return PeakResult(averages=averages, peak_index=peak_index, peak_value=peak_value)


def period_distribution(kind: str, anchor: date, sessions_for_date: SessionLookup) -> list[float]:
    """
    Bar-chart series of the period containing anchor.

    KINDS:
    - daily: 24 hour buckets of overlap minutes for the anchor day
    - weekly: 7 day totals, Monday through Sunday of the anchor's week
    - monthly: one total per day of the anchor's month
    - yearly: 12 month totals of the anchor's year

    Args:
        kind: One of DISTRIBUTION_KINDS.
        anchor: Any day inside the wanted period.
        sessions_for_date: Session Store lookup.

    Returns:
        Fully populated list of minutes; empty buckets hold 0.

    Raises:
        ValueError: If kind is unknown.
    """
    if kind == "daily":
        return hourly_distribution(sessions_for_date(anchor))
    if kind == "weekly":
        return [float(day_total_minutes(d, sessions_for_date)) for d in week_days(anchor)]
    if kind == "monthly":
        return [
            float(day_total_minutes(d, sessions_for_date))
            for d in calendar_month_days(anchor.year, anchor.month)
        ]
    if kind == "yearly":
        return [
            float(
                sum(
                    day_total_minutes(d, sessions_for_date)
                    for d in calendar_month_days(anchor.year, month)
                )
            )
            for month in range(1, Config.MONTHS_PER_YEAR + 1)
        ]
    raise ValueError(f"Unknown distribution kind: {kind!r}")
