"""
Analytics engine for Focus Analytics.

PURPOSE: One stateless entry point over the bucketing, scaling, aggregation,
trend and tag modules, plus a plain-text summary report.
AI CONTEXT: Pure data processing - no visualization, no I/O.

METRIC CATEGORIES:
1. Distributions: Per-period bar series with their axis scale
2. Peaks: Average focus per hour (trailing week, calendar month) and weekday
3. Trends: Current period against its predecessors
4. Tags: Duration shares and legend rows

USAGE:
    engine = AnalyticsEngine()
    series, scale = engine.distribution("weekly", today, store.get_sessions_for_date)
    report = engine.generate_summary_report(now, store.get_sessions_for_date, catalog)
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from .aggregation import (
    SessionLookup,
    average_by_weekday,
    calendar_month_days,
    monthly_peak_hour,
    period_distribution,
    week_days,
    weekly_peak_hour,
)
from .config import Config
from .models import AxisScale, FocusSummary, PeakResult, Session, Tag, TagAllocation, TrendPeriod
from .scaling import scale_series
from .tags import allocate, format_duration, summarize_top
from .trends import comparison_summary, focus_summary, trend_for

__all__ = ["AnalyticsEngine", "collect_sessions", "format_minutes"]

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def collect_sessions(start: date, end: date, sessions_for_date: SessionLookup) -> list[Session]:
    """All sessions dated within [start, end], oldest day first."""
    sessions: list[Session] = []
    day = start
    while day <= end:
        sessions.extend(sessions_for_date(day))
        day += timedelta(days=1)
    return sessions


def format_minutes(minutes: float) -> str:
    """
    Format minutes as "1h 25m", "2h" or "40m".

    Example:
        >>> format_minutes(85)
        '1h 25m'
    """
    hours, mins = divmod(round(minutes), 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


class AnalyticsEngine:
    """
    Facade over the session analytics functions.

    DESIGN:
    - Stateless: Each method operates on provided data
    - Pure: No side effects, only data transformation
    - Configurable: Trend length and legend size from Config or constructor
    """

    def __init__(
        self,
        trend_periods: int | None = None,
        legend_limit: int | None = None,
    ) -> None:
        """
        Initialize the engine with display parameters.

        Args:
            trend_periods: Periods per trend card. Default:
                Config.get_trend_periods() (3 unless overridden).
            legend_limit: Individually listed tags in the legend.
                Default: Config.LEGEND_TOP_N (5).

        Example:
            >>> AnalyticsEngine(trend_periods=4).trend_periods
            4
        """
        self.trend_periods = trend_periods or Config.get_trend_periods()
        self.legend_limit = legend_limit or Config.LEGEND_TOP_N

    def distribution(
        self,
        kind: str,
        anchor: date,
        sessions_for_date: SessionLookup,
    ) -> tuple[list[float], AxisScale]:
        """
        Bar-chart series of a period and its axis scale.

        The daily series uses the fixed 60-minute axis, the longer periods use
        the bar-chart headroom rule.

        Args:
            kind: "daily", "weekly", "monthly" or "yearly".
            anchor: Any day inside the period.
            sessions_for_date: Session Store lookup.

        Returns:
            Tuple (series, scale).

        Raises:
            ValueError: If kind is unknown.
        """
        series = period_distribution(kind, anchor, sessions_for_date)
        return series, scale_series(kind, series)

    def weekly_peak(self, today: date, sessions_for_date: SessionLookup) -> PeakResult:
        """Peak focus hour over the trailing 7 days."""
        return weekly_peak_hour(today, sessions_for_date)

    def monthly_peak(self, year: int, month: int, sessions_for_date: SessionLookup) -> PeakResult:
        """Peak focus hour over a calendar month."""
        return monthly_peak_hour(year, month, sessions_for_date)

    def weekday_peak(self, year: int, month: int, sessions_for_date: SessionLookup) -> PeakResult:
        """Most focused weekday (Mon=0) over a calendar month."""
        return average_by_weekday(calendar_month_days(year, month), sessions_for_date)

    def trend(self, unit: str, now: datetime, sessions_for_date: SessionLookup) -> list[TrendPeriod]:
        """Trend bars for the current period of a unit and its predecessors."""
        return trend_for(unit, now, sessions_for_date, self.trend_periods)

    def week_summary(self, anchor: date, sessions_for_date: SessionLookup) -> FocusSummary:
        """Focus summary of the Monday-based week containing anchor."""
        return focus_summary(week_days(anchor)[0], sessions_for_date)

    def tag_shares(
        self,
        start: date,
        end: date,
        sessions_for_date: SessionLookup,
        tag_catalog: Sequence[Tag],
    ) -> TagAllocation:
        """Tag allocation over the sessions dated within [start, end]."""
        sessions = collect_sessions(start, end, sessions_for_date)
        return allocate(sessions, tag_catalog, start, end)

    def generate_summary_report(
        self,
        now: datetime,
        sessions_for_date: SessionLookup,
        tag_catalog: Sequence[Tag],
    ) -> str:
        """
        Generate a plain-text summary of focus analytics as of now.

        Sections: today versus previous days, this week's summary, the
        weekly peak hour, the most focused weekday of the month and the tag
        split of the current week.

        Business context: The CLI report gives the same numbers as the
        dashboard for people who live in the terminal.

        Args:
            now: Current local date and time.
            sessions_for_date: Session Store lookup.
            tag_catalog: Known tags for resolving tag ids.

        Returns:
            Multi-line report string.

        Example:
            >>> print(engine.generate_summary_report(now, lookup, catalog))
            ==================================================
            FOCUS ANALYTICS - REPORT FOR 2026-10-18
            ...
        """
        today = now.date()
        daily = self.trend("day", now, sessions_for_date)
        headline = comparison_summary(daily)
        summary = self.week_summary(today, sessions_for_date)
        peak = self.weekly_peak(today, sessions_for_date)
        weekday = self.weekday_peak(today.year, today.month, sessions_for_date)
        week = week_days(today)
        allocation = self.tag_shares(week[0], week[-1], sessions_for_date, tag_catalog)

        lines = [
            "=" * 50,
            f"FOCUS ANALYTICS - REPORT FOR {today.isoformat()}",
            "=" * 50,
            "",
            "DAILY TREND",
        ]
        for period in daily:
            line = f"  - {period.label}: {format_minutes(period.total_minutes)}"
            if period.comparison_partial_minutes is not None:
                line += f" (by {now:%H:%M}: {format_minutes(period.comparison_partial_minutes)})"
            lines.append(line)
        if headline is not None:
            lines.append(f"  Change vs previous day: {headline['percentage_change']:+d}%")

        lines.extend(
            [
                "",
                "THIS WEEK",
                f"  - Total focus: {format_minutes(summary.total_minutes)}"
                f" ({summary.total_change:+d}%)",
                f"  - Average per active day: {format_minutes(summary.average_minutes_per_active_day)}"
                f" ({summary.average_change:+d}%)",
                f"  - Sessions: {summary.session_count} ({summary.session_change:+d}%)",
                "",
                "PEAKS",
            ]
        )
        if peak.peak_value > 0:
            lines.append(
                f"  - Most focused hour (last 7 days): {peak.peak_index:02d}:00"
                f" ({peak.peak_value:.1f} min/day)"
            )
        else:
            lines.append("  - Most focused hour (last 7 days): no data")
        if weekday.peak_value > 0:
            lines.append(
                f"  - Most focused weekday ({today:%B}): {WEEKDAY_NAMES[weekday.peak_index]}"
                f" ({weekday.peak_value:.1f} min)"
            )
        else:
            lines.append(f"  - Most focused weekday ({today:%B}): no data")

        lines.extend(["", "TAGS THIS WEEK"])
        if allocation.total_duration_seconds == 0:
            lines.append("  - No tagged focus time")
        for entry in summarize_top(allocation.shares, self.legend_limit):
            lines.append(
                f"  - {entry.label}: {format_duration(entry.duration_seconds)}"
                f" ({entry.percentage:.1f}%)"
            )

        lines.extend(["", "=" * 50])
        return "\n".join(lines)
