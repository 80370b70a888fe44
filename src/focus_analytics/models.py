"""
Data models for Focus Analytics.

PURPOSE: Type-safe dataclasses for session inputs and analytics outputs.
AI CONTEXT: Inputs (Session, Tag) are read-only to the analytics core;
every output record is built fresh per call and never cached.

MODEL HIERARCHY:
- Session: One focused-work (or break) interval on a calendar day
- Tag: Catalog entry a session may reference by object or id
- PeakResult, AxisScale: Distribution views for line/bar charts
- PeriodDef, ElapsedPoint, TrendPeriod, FocusSummary: Trend comparison
- TagShare, TagAllocation, LegendEntry: Tag duration shares

SERIALIZATION:
Inputs have to_dict()/from_dict() for JSON persistence. Outputs have
to_dict() for the JSON API.

USAGE:
    session = Session.create("2026-10-18", "09:00", "09:25", tags=["work"])
    tag = Tag.from_dict({"id": "work", "name": "Work", "icon": "ri-briefcase-line"})
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

__all__ = [
    "Tag",
    "Session",
    "PeakResult",
    "AxisScale",
    "PeriodDef",
    "ElapsedPoint",
    "TrendPeriod",
    "FocusSummary",
    "TagShare",
    "TagAllocation",
    "LegendEntry",
]


def _now_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(UTC).isoformat()


def _generate_session_id() -> str:
    """
    Generate a unique session ID.

    Returns:
        32-character hex string.

    Example:
        >>> len(_generate_session_id())
        32
    """
    return uuid.uuid4().hex


@dataclass
class Tag:
    """
    Tag catalog entry.

    A session references tags either by embedding the full record or by id;
    ids are resolved against the catalog at allocation time.
    """

    id: str
    name: str
    icon: str = ""
    color: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize tag for JSON storage."""
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tag:
        """
        Deserialize tag from dictionary.

        Args:
            data: Dict with 'id' and optional 'name', 'icon', 'color'.
                A missing name falls back to the id.

        Returns:
            Tag instance.

        Raises:
            KeyError: If 'id' is missing.
        """
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            icon=data.get("icon", ""),
            color=data.get("color", ""),
        )


@dataclass
class Session:
    """
    Focused-work or break session on a single calendar day.

    TIME FIELDS:
    - start_time / end_time: "HH:MM" wall-clock times; "24:00" is a valid end
    - duration_minutes: Authoritative value for totals
    - date: ISO calendar date, filled in by the store

    SESSION TYPES:
    - "focus", "custom": Productive time
    - "break", "longBreak": Rest time, excluded from analytics

    Bucketing uses start_time/end_time, totals use duration_minutes. The two
    are expected to agree but are not cross-checked.
    """

    id: str
    start_time: str
    end_time: str
    duration_minutes: int
    type: str = "focus"
    tags: list[Tag | str] = field(default_factory=list)
    date: str | None = None
    created_at: str | None = None

    @classmethod
    def create(
        cls,
        day: str,
        start_time: str,
        end_time: str,
        session_type: str = "focus",
        tags: list[Tag | str] | None = None,
        duration_minutes: int | None = None,
    ) -> Session:
        """
        Factory method to create a new session with generated ID and timestamp.

        Business context: Manual entries only carry start/end times; the
        duration is derived from them unless the caller already knows it.

        Args:
            day: ISO calendar date the session belongs to.
            start_time: "HH:MM" start.
            end_time: "HH:MM" end.
            session_type: One of Config.SESSION_TYPES.
            tags: Tag objects or tag ids.
            duration_minutes: Explicit duration. Default: end minus start,
                floored at zero.

        Returns:
            New Session with unique id and created_at set.

        Raises:
            ValueError: If a time is not "HH:MM" and no duration is given.

        Example:
            >>> session = Session.create('2026-10-18', '09:00', '09:25')
            >>> session.duration_minutes
            25
        """
        if duration_minutes is None:
            from .bucketing import time_to_minutes

            duration_minutes = max(0, time_to_minutes(end_time) - time_to_minutes(start_time))
        return cls(
            id=_generate_session_id(),
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration_minutes,
            type=session_type,
            tags=list(tags or []),
            date=day,
            created_at=_now_iso(),
        )

    @property
    def day(self) -> date | None:
        """Calendar date as a date object, or None when unset or invalid."""
        if not self.date:
            return None
        try:
            return date.fromisoformat(self.date)
        except ValueError:
            return None

    @property
    def tag_ids(self) -> list[str]:
        """Ids of all tag references, in order."""
        return [t if isinstance(t, str) else t.id for t in self.tags]

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize session to dictionary for JSON storage.

        Embedded Tag objects are written as dicts, id references as strings.

        Returns:
            Dict with id, type, duration_minutes, start_time, end_time, date,
            created_at and tags.
        """
        return {
            "id": self.id,
            "type": self.type,
            "duration_minutes": self.duration_minutes,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "date": self.date,
            "created_at": self.created_at,
            "tags": [t if isinstance(t, str) else t.to_dict() for t in self.tags],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], day: str | None = None) -> Session:
        """
        Deserialize session from dictionary.

        Handles both current key names and the legacy 'session_type' and
        'duration' keys written by older timer builds.

        Args:
            data: Dict as stored by to_dict() or a legacy record.
            day: Calendar date to use when the record carries none.

        Returns:
            Session instance.

        Raises:
            KeyError: If required field 'id' is missing.

        Example:
            >>> s = Session.from_dict({'id': 'a', 'session_type': 'focus', 'duration': 25,
            ...                        'start_time': '09:00', 'end_time': '09:25'})
            >>> s.duration_minutes
            25
        """
        raw_tags = data.get("tags") or []
        if not isinstance(raw_tags, list):
            raw_tags = [raw_tags]
        tags: list[Tag | str] = [
            Tag.from_dict(t) if isinstance(t, dict) else str(t) for t in raw_tags
        ]
        return cls(
            id=data["id"],
            start_time=data.get("start_time") or "",
            end_time=data.get("end_time") or "",
            duration_minutes=int(data.get("duration_minutes", data.get("duration", 0)) or 0),
            type=data.get("type", data.get("session_type", "focus")),
            tags=tags,
            date=data.get("date") or day,
            created_at=data.get("created_at"),
        )


# =============================================================================
# DISTRIBUTION OUTPUTS
# =============================================================================


@dataclass
class PeakResult:
    """Averaged bucket series with its peak bucket."""

    averages: list[float]
    peak_index: int
    peak_value: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "averages": list(self.averages),
            "peak_index": self.peak_index,
            "peak_value": self.peak_value,
        }


@dataclass
class AxisScale:
    """Chart axis maximum and tick values, independent of rendering."""

    axis_max: int
    ticks: list[int]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {"axis_max": self.axis_max, "ticks": list(self.ticks)}


# =============================================================================
# TREND OUTPUTS
# =============================================================================


@dataclass(frozen=True)
class PeriodDef:
    """
    Which period to compute.

    unit: "day", "week" (trailing 7 days), "month" or "year".
    offset: 0 = current period, 1 = previous, 2 = two back.
    """

    unit: str
    offset: int = 0


@dataclass(frozen=True)
class ElapsedPoint:
    """How far into the current period "now" is: whole days plus time of day."""

    day_offset: int
    hour: int
    minute: int

    @property
    def cutoff_minutes(self) -> int:
        """Minute of day at which the partial day ends."""
        return self.hour * 60 + self.minute


@dataclass
class TrendPeriod:
    """
    One bar of a trend card.

    percentage_of_max is a bar-width ratio against the largest total in the
    comparison set, not a statistical percentage. The comparison fields are
    only set for non-current periods.
    """

    label: str
    total_minutes: int
    percentage_of_max: float
    start_date: date
    end_date: date
    offset: int = 0
    comparison_partial_minutes: int | None = None
    comparison_partial_percentage: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "label": self.label,
            "total_minutes": self.total_minutes,
            "percentage_of_max": self.percentage_of_max,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "offset": self.offset,
            "comparison_partial_minutes": self.comparison_partial_minutes,
            "comparison_partial_percentage": self.comparison_partial_percentage,
        }


@dataclass
class FocusSummary:
    """Weekly focus headline numbers and their change versus the previous week."""

    total_minutes: int
    average_minutes_per_active_day: float
    session_count: int
    total_change: int
    average_change: int
    session_change: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "total_minutes": self.total_minutes,
            "average_minutes_per_active_day": self.average_minutes_per_active_day,
            "session_count": self.session_count,
            "total_change": self.total_change,
            "average_change": self.average_change,
            "session_change": self.session_change,
        }


# =============================================================================
# TAG OUTPUTS
# =============================================================================


@dataclass
class TagShare:
    """A tag's attributed focus time within a date range."""

    tag_id: str
    tag: Tag
    duration_seconds: int
    session_count: int
    percentage_of_total: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "tag_id": self.tag_id,
            "tag": self.tag.to_dict(),
            "duration_seconds": self.duration_seconds,
            "session_count": self.session_count,
            "percentage_of_total": self.percentage_of_total,
        }


@dataclass
class TagAllocation:
    """Ranked tag shares plus range totals."""

    shares: list[TagShare]
    total_duration_seconds: int
    total_sessions: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "shares": [s.to_dict() for s in self.shares],
            "total_duration_seconds": self.total_duration_seconds,
            "total_sessions": self.total_sessions,
        }


@dataclass
class LegendEntry:
    """One legend row: an individual tag or the collapsed "N others" row."""

    label: str
    icon: str
    color: str
    duration_seconds: int
    percentage: float
    tag_id: str | None = None
    is_others: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON API."""
        return {
            "label": self.label,
            "icon": self.icon,
            "color": self.color,
            "duration_seconds": self.duration_seconds,
            "percentage": self.percentage,
            "tag_id": self.tag_id,
            "is_others": self.is_others,
        }
