"""
FastAPI routes for Focus Analytics.

PURPOSE: Thin route handlers that delegate to the presenter.
AI CONTEXT: Routes parse and validate query values; numbers come from the
analytics core through AnalyticsPresenter.

ROUTE STRUCTURE:
- /api/health : Liveness and version
- /api/peak/* : Peak hour (trailing week, month) and peak weekday
- /api/trend/{unit} : Trend card for day/week/month/year
- /api/distribution/{kind} : Bar series for daily/weekly/monthly/yearly
- /api/tags : Tag shares and legend
- /api/summary : Weekly summary and text report

Every analytics route takes ?date=YYYY-MM-DD and defaults to today.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query

from ..__version__ import __version__
from ..aggregation import DISTRIBUTION_KINDS
from ..config import Config
from ..presenters import AnalyticsPresenter
from ..statistics import AnalyticsEngine
from ..storage import SessionStore

__all__ = [
    "router",
    "get_store",
    "get_engine",
    "get_presenter",
]

logger = logging.getLogger(__name__)

router = APIRouter()

DateQuery = Annotated[
    str | None, Query(alias="date", description="Anchor day as YYYY-MM-DD (default: today)")
]


# =============================================================================
# Dependency Factory Functions
# =============================================================================


def get_store() -> SessionStore:
    """
    Create a SessionStore for the configured storage directory.

    A new instance per request keeps reads fresh; the store caches the
    session map only for its own lifetime.
    """
    return SessionStore()


def get_engine() -> AnalyticsEngine:
    """Create an AnalyticsEngine with configured trend length and legend size."""
    return AnalyticsEngine()


def get_presenter() -> AnalyticsPresenter:
    """
    Assemble the presenter with its store and engine.

    Example:
        >>> presenter = get_presenter()
        >>> presenter.get_hourly_peak(date.today()).peak_label
        '09:00'
    """
    return AnalyticsPresenter(get_store(), get_engine())


PresenterDep = Annotated[AnalyticsPresenter, Depends(get_presenter)]


def _parse_day(value: str | None) -> date:
    """
    Parse the ?date= query value.

    Raises:
        HTTPException: 400 if the value is not an ISO date.
    """
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(f"Rejected invalid date query: {value!r}")
        raise HTTPException(status_code=400, detail=f"Invalid date: {value!r}") from None


def _as_of(day: date) -> datetime:
    """The day at the current wall-clock time."""
    return datetime.combine(day, datetime.now().time())


# ============================================================================
# API Routes (JSON)
# ============================================================================


@router.get("/api/health")
async def api_health() -> dict[str, str]:
    """Liveness probe with the package version."""
    return {"status": "ok", "version": __version__}


@router.get("/api/peak/hourly")
async def api_peak_hourly(presenter: PresenterDep, day: DateQuery = None) -> dict[str, Any]:
    """
    Average focus minutes per hour over the 7 days ending at ?date.

    Example:
        >>> # GET /api/peak/hourly?date=2026-10-18
        >>> {"averages": [0.0, ...], "peak_index": 9, "peak_label": "09:00", ...}
    """
    return presenter.get_hourly_peak(_parse_day(day)).to_dict()


@router.get("/api/peak/monthly")
async def api_peak_monthly(presenter: PresenterDep, day: DateQuery = None) -> dict[str, Any]:
    """Average focus minutes per hour over the calendar month of ?date."""
    return presenter.get_monthly_peak(_parse_day(day)).to_dict()


@router.get("/api/peak/weekday")
async def api_peak_weekday(presenter: PresenterDep, day: DateQuery = None) -> dict[str, Any]:
    """Average focus minutes per weekday over the calendar month of ?date."""
    return presenter.get_weekday_peak(_parse_day(day)).to_dict()


@router.get("/api/trend/{unit}")
async def api_trend(unit: str, presenter: PresenterDep, day: DateQuery = None) -> dict[str, Any]:
    """
    Trend card for a period unit.

    Raises:
        HTTPException: 404 for a unit other than day/week/month/year.
    """
    if unit not in Config.TREND_UNITS:
        raise HTTPException(status_code=404, detail=f"Unknown trend unit: {unit}")
    return presenter.get_trend(unit, _as_of(_parse_day(day)))


@router.get("/api/distribution/{kind}")
async def api_distribution(
    kind: str, presenter: PresenterDep, day: DateQuery = None
) -> dict[str, Any]:
    """
    Bar-chart series and axis scale of the period containing ?date.

    Raises:
        HTTPException: 404 for a kind other than daily/weekly/monthly/yearly.
    """
    if kind not in DISTRIBUTION_KINDS:
        raise HTTPException(status_code=404, detail=f"Unknown distribution kind: {kind}")
    return presenter.get_distribution(kind, _parse_day(day)).to_dict()


@router.get("/api/tags")
async def api_tags(
    presenter: PresenterDep,
    day: DateQuery = None,
    start: Annotated[str | None, Query(description="Range start as YYYY-MM-DD")] = None,
    end: Annotated[str | None, Query(description="Range end as YYYY-MM-DD")] = None,
) -> dict[str, Any]:
    """
    Tag shares and legend rows.

    With ?start and ?end the range is explicit; otherwise it is the
    Monday-based week containing ?date.

    Raises:
        HTTPException: 400 for an invalid date, only one range bound, or
            start after end.
    """
    if start is None and end is None:
        return presenter.get_week_tags(_parse_day(day))
    if start is None or end is None:
        raise HTTPException(status_code=400, detail="Both start and end are required")
    range_start, range_end = _parse_day(start), _parse_day(end)
    if range_start > range_end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return presenter.get_tag_breakdown(range_start, range_end)


@router.get("/api/summary")
async def api_summary(presenter: PresenterDep, day: DateQuery = None) -> dict[str, Any]:
    """Weekly focus summary with week-over-week changes and the text report."""
    return presenter.get_summary(_as_of(_parse_day(day)))
