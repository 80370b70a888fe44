"""
Presenters for Focus Analytics views.

PURPOSE: Testable business logic layer between the analytics core and the
JSON API / CLI.
AI CONTEXT: Pure data transformation over a SessionStore - no rendering.

DESIGN PRINCIPLES:
1. Presenters receive a store and an engine, return view models
2. No dependencies on a specific UI framework
3. Axis labels and display strings are decided here, never in the core
4. Malformed sessions are counted and logged, not silently dropped

USAGE:
    presenter = AnalyticsPresenter(store, engine)
    view = presenter.get_hourly_peak(date.today())
    view.to_dict()  # ready for the JSON API
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .aggregation import calendar_month_days, trailing_window_days, week_days
from .bucketing import count_malformed_sessions
from .config import Config
from .models import AxisScale, PeakResult
from .scaling import scale_series
from .statistics import format_minutes
from .tags import format_duration, summarize_top
from .trends import comparison_summary

if TYPE_CHECKING:
    from .statistics import AnalyticsEngine
    from .storage import SessionStore

__all__ = [
    "HOUR_LABELS",
    "WEEKDAY_LABELS",
    "MONTH_LABELS",
    "series_labels",
    "PeakViewModel",
    "DistributionViewModel",
    "AnalyticsPresenter",
]

logger = logging.getLogger(__name__)

HOUR_LABELS: list[str] = [f"{hour:02d}:00" for hour in range(Config.HOURS_PER_DAY)]
WEEKDAY_LABELS: list[str] = list(calendar.day_abbr)
MONTH_LABELS: list[str] = list(calendar.month_abbr)[1:]


def series_labels(kind: str, anchor: date) -> list[str]:
    """
    Axis labels for a distribution series.

    Args:
        kind: "daily", "weekly", "monthly" or "yearly".
        anchor: Any day inside the period.

    Returns:
        One label per bucket: hours, weekday names, day numbers or months.

    Raises:
        ValueError: If kind is unknown.

    Example:
        >>> series_labels('weekly', date(2026, 10, 18))[:2]
        ['Mon', 'Tue']
    """
    if kind == "daily":
        return list(HOUR_LABELS)
    if kind == "weekly":
        return list(WEEKDAY_LABELS)
    if kind == "monthly":
        return [str(d.day) for d in calendar_month_days(anchor.year, anchor.month)]
    if kind == "yearly":
        return list(MONTH_LABELS)
    raise ValueError(f"Unknown distribution kind: {kind!r}")


@dataclass
class PeakViewModel:
    """View model for a peak-hour or peak-weekday line chart."""

    title: str
    labels: list[str]
    result: PeakResult
    scale: AxisScale
    malformed_sessions: int = 0

    @property
    def has_data(self) -> bool:
        """True when any bucket holds focus time."""
        return self.result.peak_value > 0

    @property
    def peak_label(self) -> str:
        """
        Label of the peak bucket, or "No data" for an empty window.

        Example:
            >>> view.peak_label
            '09:00'
        """
        if not self.has_data:
            return "No data"
        return self.labels[self.result.peak_index]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "title": self.title,
            "labels": list(self.labels),
            **self.result.to_dict(),
            "peak_label": self.peak_label,
            "scale": self.scale.to_dict(),
            "malformed_sessions": self.malformed_sessions,
        }


@dataclass
class DistributionViewModel:
    """View model for a per-period bar chart."""

    kind: str
    anchor: date
    labels: list[str]
    series: list[float]
    scale: AxisScale
    malformed_sessions: int = 0

    @property
    def total_minutes(self) -> float:
        """Sum of all buckets."""
        return sum(self.series)

    @property
    def total_display(self) -> str:
        """Total focus time as "1h 25m"."""
        return format_minutes(self.total_minutes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "kind": self.kind,
            "anchor": self.anchor.isoformat(),
            "labels": list(self.labels),
            "series": list(self.series),
            "scale": self.scale.to_dict(),
            "total_minutes": self.total_minutes,
            "total_display": self.total_display,
            "malformed_sessions": self.malformed_sessions,
        }


class AnalyticsPresenter:
    """
    Presenter assembling analytics view models from stored sessions.

    Business context: The JSON API and the CLI show the same numbers; this
    class is the one place that wires the store lookup into the engine and
    decides labels and display strings.
    """

    def __init__(self, store: SessionStore, engine: AnalyticsEngine) -> None:
        """
        Initialize presenter with data sources.

        Args:
            store: SessionStore providing sessions and the tag catalog.
            engine: AnalyticsEngine computing the numbers.
        """
        self.store = store
        self.engine = engine

    def _count_malformed(self, days: Iterable[date]) -> int:
        """Count and log productive sessions that bucketing clamps to zero."""
        malformed = 0
        for day in days:
            productive = Config.filter_productive_sessions(self.store.get_sessions_for_date(day))
            malformed += count_malformed_sessions(productive)
        if malformed:
            logger.warning(f"{malformed} session(s) have an end time not after their start time")
        return malformed

    def get_hourly_peak(self, today: date) -> PeakViewModel:
        """
        Peak focus hour over the trailing 7 days ending today.

        Returns:
            PeakViewModel with 24 hour labels and a dynamic-scale axis.
        """
        result = self.engine.weekly_peak(today, self.store.get_sessions_for_date)
        return PeakViewModel(
            title="Peak focus hour (last 7 days)",
            labels=list(HOUR_LABELS),
            result=result,
            scale=scale_series("peak_hour", result.averages),
            malformed_sessions=self._count_malformed(trailing_window_days(today)),
        )

    def get_monthly_peak(self, anchor: date) -> PeakViewModel:
        """Peak focus hour over the calendar month containing anchor."""
        result = self.engine.monthly_peak(anchor.year, anchor.month, self.store.get_sessions_for_date)
        return PeakViewModel(
            title=f"Peak focus hour ({anchor:%B %Y})",
            labels=list(HOUR_LABELS),
            result=result,
            scale=scale_series("peak_hour", result.averages),
            malformed_sessions=self._count_malformed(calendar_month_days(anchor.year, anchor.month)),
        )

    def get_weekday_peak(self, anchor: date) -> PeakViewModel:
        """Most focused weekday over the calendar month containing anchor."""
        result = self.engine.weekday_peak(anchor.year, anchor.month, self.store.get_sessions_for_date)
        return PeakViewModel(
            title=f"Most focused weekday ({anchor:%B %Y})",
            labels=list(WEEKDAY_LABELS),
            result=result,
            scale=scale_series("peak_weekday", result.averages),
        )

    def get_distribution(self, kind: str, anchor: date) -> DistributionViewModel:
        """
        Bar-chart view of the period containing anchor.

        Raises:
            ValueError: If kind is unknown.
        """
        series, scale = self.engine.distribution(kind, anchor, self.store.get_sessions_for_date)
        malformed = self._count_malformed([anchor]) if kind == "daily" else 0
        return DistributionViewModel(
            kind=kind,
            anchor=anchor,
            labels=series_labels(kind, anchor),
            series=series,
            scale=scale,
            malformed_sessions=malformed,
        )

    def get_trend(self, unit: str, now: datetime) -> dict[str, Any]:
        """
        Trend card for a unit: bars plus the headline comparison.

        Raises:
            ValueError: If unit is unknown.
        """
        periods = self.engine.trend(unit, now, self.store.get_sessions_for_date)
        return {
            "unit": unit,
            "as_of": now.isoformat(timespec="minutes"),
            "periods": [
                {**p.to_dict(), "total_display": format_minutes(p.total_minutes)} for p in periods
            ],
            "comparison": comparison_summary(periods),
        }

    def get_tag_breakdown(self, start: date, end: date) -> dict[str, Any]:
        """
        Tag shares and legend rows for the sessions within [start, end].

        Returns:
            Dict with 'start', 'end', the allocation fields and 'legend'.
        """
        allocation = self.engine.tag_shares(
            start, end, self.store.get_sessions_for_date, self.store.load_tags()
        )
        legend = summarize_top(allocation.shares, self.engine.legend_limit)
        return {
            "start": start.isoformat(),
            "end": end.isoformat(),
            **allocation.to_dict(),
            "total_display": format_duration(allocation.total_duration_seconds),
            "legend": [
                {**entry.to_dict(), "duration_display": format_duration(entry.duration_seconds)}
                for entry in legend
            ],
        }

    def get_week_tags(self, anchor: date) -> dict[str, Any]:
        """Tag breakdown of the Monday-based week containing anchor."""
        days = week_days(anchor)
        return self.get_tag_breakdown(days[0], days[-1])

    def get_summary(self, now: datetime) -> dict[str, Any]:
        """
        Weekly focus summary plus the full text report.

        Returns:
            Dict with the FocusSummary fields, display strings and 'report'.
        """
        summary = self.engine.week_summary(now.date(), self.store.get_sessions_for_date)
        week = week_days(now.date())
        return {
            "week_start": week[0].isoformat(),
            "week_end": week[-1].isoformat(),
            **summary.to_dict(),
            "total_display": format_minutes(summary.total_minutes),
            "average_display": format_minutes(summary.average_minutes_per_active_day),
            "report": self.get_report(now),
        }

    def get_report(self, now: datetime) -> str:
        """Plain-text summary report as of now."""
        return self.engine.generate_summary_report(
            now, self.store.get_sessions_for_date, self.store.load_tags()
        )
