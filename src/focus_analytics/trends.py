"""
Trend comparison for Focus Analytics.

PURPOSE: Compare focus totals of a period with its preceding periods.
AI CONTEXT: Pure data processing - "now" is always an explicit argument.

PERIOD UNITS:
- day: A single calendar day
- week: Trailing 7 days ending on the anchor day
- month: Calendar month
- year: Calendar year
Offset 0 is the current period, 1 the previous one, and so on.

FAIR COMPARISON:
The current period is still in progress, so each past period also gets a
partial total "as of the same elapsed time": the full days before the
equivalent day offset, plus the minutes of that day before the current
time of day. Those minutes use the same overlap logic as the hourly buckets.

FAILURE SEMANTICS:
Nothing here raises on data. A period with no sessions totals 0, and a
previous total of 0 yields a neutral or +100% change instead of a division
by zero.

USAGE:
    periods = trend_for("day", datetime.now(), store.get_sessions_for_date)
    periods[0].total_minutes, periods[1].comparison_partial_minutes
"""

from __future__ import annotations

import calendar
import math
from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import Any

from .aggregation import SessionLookup, day_total_minutes
from .bucketing import minutes_before
from .config import Config
from .models import ElapsedPoint, FocusSummary, PeriodDef, TrendPeriod

__all__ = [
    "percentage_change",
    "period_bounds",
    "period_label",
    "elapsed_point",
    "period_total",
    "partial_total",
    "compare",
    "trend_for",
    "comparison_summary",
    "focus_summary",
]


def percentage_change(current: float, previous: float) -> int:
    """
    Whole-number percentage change from previous to current.

    A previous value of 0 yields 100 when there is any current activity and
    0 otherwise, so "any activity beats none" without dividing by zero.

    Args:
        current: Value of the newer period.
        previous: Value of the older period.

    Returns:
        The change rounded half up (12.5 becomes 13, -12.5 becomes -12),
        or the zero-previous rule.

    Example:
        >>> percentage_change(20, 40)
        -50
        >>> percentage_change(30, 0)
        100
        >>> percentage_change(9, 8)
        13
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return math.floor((current - previous) / previous * 100 + 0.5)


def _shift_month(year: int, month: int, back: int) -> tuple[int, int]:
    """Move (year, month) back by a number of months."""
    index = year * 12 + (month - 1) - back
    return index // 12, index % 12 + 1


def period_bounds(unit: str, anchor: date, offset: int = 0) -> tuple[date, date]:
    """
    Inclusive first and last day of a period.

    Args:
        unit: "day", "week", "month" or "year".
        anchor: Day inside the current period ("today").
        offset: How many periods back. 0 = current.

    Returns:
        Tuple (start, end), both inclusive.

    Raises:
        ValueError: If unit is unknown.

    Example:
        >>> period_bounds('week', date(2026, 10, 18), 1)
        (datetime.date(2026, 10, 5), datetime.date(2026, 10, 11))
    """
    if unit == "day":
        day = anchor - timedelta(days=offset)
        return day, day
    if unit == "week":
        end = anchor - timedelta(days=Config.TRAILING_WINDOW_DAYS * offset)
        return end - timedelta(days=Config.TRAILING_WINDOW_DAYS - 1), end
    if unit == "month":
        year, month = _shift_month(anchor.year, anchor.month, offset)
        _, last = calendar.monthrange(year, month)
        return date(year, month, 1), date(year, month, last)
    if unit == "year":
        year = anchor.year - offset
        return date(year, 1, 1), date(year, 12, 31)
    raise ValueError(f"Unknown period unit: {unit!r}")


def period_label(unit: str, start: date, offset: int) -> str:
    """
    Display label for a trend bar.

    Example:
        >>> period_label('day', date(2026, 10, 17), 1)
        'Yesterday'
    """
    if unit == "day":
        if offset == 0:
            return "Today"
        if offset == 1:
            return "Yesterday"
        return f"{start.day} {start.strftime('%b')}"
    if unit == "week":
        if offset == 0:
            return "This week"
        if offset == 1:
            return "Last week"
        return f"{offset} weeks ago"
    if unit == "month":
        return start.strftime("%B %Y")
    return str(start.year)


def elapsed_point(unit: str, now: datetime) -> ElapsedPoint:
    """
    How far into the current period "now" is.

    The day offset is now's position within its period: 0 for a day, 6 for
    the trailing week (today is its last day), day-of-month minus one for a
    month and day-of-year minus one for a year.

    Args:
        unit: Period unit.
        now: Current local date and time.

    Returns:
        ElapsedPoint with day offset and time of day.

    Raises:
        ValueError: If unit is unknown.
    """
    if unit == "day":
        day_offset = 0
    elif unit == "week":
        day_offset = Config.TRAILING_WINDOW_DAYS - 1
    elif unit == "month":
        day_offset = now.day - 1
    elif unit == "year":
        day_offset = now.timetuple().tm_yday - 1
    else:
        raise ValueError(f"Unknown period unit: {unit!r}")
    return ElapsedPoint(day_offset=day_offset, hour=now.hour, minute=now.minute)


def _days_between(start: date, end: date) -> list[date]:
    """Inclusive list of days from start to end."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def period_total(start: date, end: date, sessions_for_date: SessionLookup) -> int:
    """Sum of productive duration_minutes over [start, end]."""
    return sum(day_total_minutes(day, sessions_for_date) for day in _days_between(start, end))


def partial_total(
    start: date,
    end: date,
    elapsed: ElapsedPoint,
    sessions_for_date: SessionLookup,
) -> int:
    """
    A past period's total up to the current period's elapsed point.

    Whole days strictly before the equivalent day offset contribute their
    full durations. The day at the offset contributes only the minutes of
    sessions that started before the cutoff, clipped at the cutoff. If the
    past period is shorter than the offset (e.g. February versus March 31)
    every one of its days counts in full.

    Args:
        start: First day of the past period.
        end: Last day of the past period.
        elapsed: Position of "now" within the current period.
        sessions_for_date: Session Store lookup.

    Returns:
        Partial total in minutes.

    Example:
        >>> # Yesterday had 09:00-10:00; it is now 09:20
        >>> partial_total(yesterday, yesterday, ElapsedPoint(0, 9, 20), lookup)
        20
    """
    total = 0
    for day in _days_between(start, end)[: elapsed.day_offset]:
        total += day_total_minutes(day, sessions_for_date)

    partial_day = start + timedelta(days=elapsed.day_offset)
    if partial_day <= end:
        cutoff = elapsed.cutoff_minutes
        for session in Config.filter_productive_sessions(sessions_for_date(partial_day)):
            total += minutes_before(session, cutoff)
    return total


def compare(
    period_defs: Sequence[PeriodDef],
    sessions_for_date: SessionLookup,
    now: datetime,
) -> list[TrendPeriod]:
    """
    Compute trend bars for a set of periods.

    Business context: The trend card shows today (or this week) next to its
    predecessors. Bars scale against the largest total, and past bars carry
    a marker for "where you were at this time".

    Args:
        period_defs: Periods to compute, usually offsets 0..N-1 of one unit.
        sessions_for_date: Session Store lookup.
        now: Current local date and time.

    Returns:
        One TrendPeriod per definition, in input order. Non-current periods
        include comparison_partial_minutes and comparison_partial_percentage.
    """
    today = now.date()
    computed: list[tuple[PeriodDef, date, date, int]] = []
    for definition in period_defs:
        start, end = period_bounds(definition.unit, today, definition.offset)
        computed.append((definition, start, end, period_total(start, end, sessions_for_date)))

    max_total = max([total for *_, total in computed] + [1])

    periods: list[TrendPeriod] = []
    for definition, start, end, total in computed:
        period = TrendPeriod(
            label=period_label(definition.unit, start, definition.offset),
            total_minutes=total,
            percentage_of_max=total / max_total * 100,
            start_date=start,
            end_date=end,
            offset=definition.offset,
        )
        if definition.offset > 0:
            elapsed = elapsed_point(definition.unit, now)
            partial = partial_total(start, end, elapsed, sessions_for_date)
            period.comparison_partial_minutes = partial
            period.comparison_partial_percentage = partial / max_total * 100
        periods.append(period)
    return periods


def trend_for(
    unit: str,
    now: datetime,
    sessions_for_date: SessionLookup,
    periods: int | None = None,
) -> list[TrendPeriod]:
    """
    Trend bars for the current period of a unit and its predecessors.

    Args:
        unit: "day", "week", "month" or "year".
        now: Current local date and time.
        sessions_for_date: Session Store lookup.
        periods: How many periods. Default: Config.get_trend_periods().
    """
    count = periods if periods is not None else Config.get_trend_periods()
    return compare([PeriodDef(unit, offset) for offset in range(count)], sessions_for_date, now)


def comparison_summary(periods: Sequence[TrendPeriod]) -> dict[str, Any] | None:
    """
    Headline comparison of the current period against the previous one.

    Args:
        periods: Output of compare(), current period first.

    Returns:
        Dict with 'difference_minutes', 'percentage_change' and 'direction'
        ("more", "less" or "same"), or None with fewer than two periods.

    Example:
        >>> comparison_summary(periods)
        {'difference_minutes': 15, 'percentage_change': 25, 'direction': 'more'}
    """
    if len(periods) < 2:
        return None
    current, previous = periods[0].total_minutes, periods[1].total_minutes
    difference = current - previous
    if difference > 0:
        direction = "more"
    elif difference < 0:
        direction = "less"
    else:
        direction = "same"
    return {
        "difference_minutes": difference,
        "percentage_change": percentage_change(current, previous),
        "direction": direction,
    }


def _week_figures(week_start: date, sessions_for_date: SessionLookup) -> tuple[int, float, int]:
    """Total minutes, average per active day and session count of a 7-day week."""
    total = 0
    active_days = 0
    sessions = 0
    for i in range(Config.DAYS_PER_WEEK):
        day = week_start + timedelta(days=i)
        productive = Config.filter_productive_sessions(sessions_for_date(day))
        day_total = sum(max(0, s.duration_minutes) for s in productive)
        if day_total > 0:
            total += day_total
            active_days += 1
            sessions += len(productive)
    average = total / active_days if active_days else 0.0
    return total, average, sessions


def focus_summary(week_start: date, sessions_for_date: SessionLookup) -> FocusSummary:
    """
    Weekly focus summary with changes versus the previous week.

    Only days with focus time count as active days, both for the average
    and for the session count.

    Args:
        week_start: First day of the week (the caller picks Monday or Sunday).
        sessions_for_date: Session Store lookup.

    Returns:
        FocusSummary for the week starting at week_start.
    """
    total, average, sessions = _week_figures(week_start, sessions_for_date)
    previous_start = week_start - timedelta(days=Config.DAYS_PER_WEEK)
    prev_total, prev_average, prev_sessions = _week_figures(previous_start, sessions_for_date)
    return FocusSummary(
        total_minutes=total,
        average_minutes_per_active_day=average,
        session_count=sessions,
        total_change=percentage_change(total, prev_total),
        average_change=percentage_change(average, prev_average),
        session_change=percentage_change(sessions, prev_sessions),
    )
