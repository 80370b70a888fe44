"""
Tag duration allocation for Focus Analytics.

PURPOSE: Split session time across tags and rank tags by attributed time.
AI CONTEXT: Pure data processing - catalog and sessions are passed in.

ALLOCATION RULES:
- Only focus/custom sessions with a positive duration inside the range count
- No resolvable tags: full duration goes to the synthetic "Untagged" tag
- N tags: duration / N to each tag, an even split
- Session count per tag is unweighted (a shared session counts once per tag)

RANKING:
Descending by attributed duration; ties keep catalog order. Tags not in the
catalog (embedded objects, Untagged) rank after catalog tags in the order
they were first seen.

UNITS:
Durations accumulate in minutes and are emitted in seconds (x 60, rounded).

USAGE:
    allocation = allocate(sessions, catalog, week_start, week_end)
    legend = summarize_top(allocation.shares)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from .config import Config
from .models import LegendEntry, Session, Tag, TagAllocation, TagShare

__all__ = [
    "untagged_tag",
    "session_day",
    "resolve_tags",
    "allocate",
    "summarize_top",
    "format_duration",
]


def untagged_tag() -> Tag:
    """The synthetic tag that collects time of sessions without tags."""
    return Tag(
        id=Config.UNTAGGED_ID,
        name=Config.UNTAGGED_NAME,
        icon=Config.UNTAGGED_ICON,
        color=Config.UNTAGGED_COLOR,
    )


def session_day(session: Session) -> date | None:
    """
    Calendar day of a session.

    Uses the session's date, falling back to the date part of created_at.
    Returns None when neither is a valid ISO date.
    """
    if session.day is not None:
        return session.day
    if session.created_at:
        try:
            return date.fromisoformat(session.created_at[:10])
        except ValueError:
            return None
    return None


def resolve_tags(session: Session, catalog_by_id: dict[str, Tag]) -> list[Tag]:
    """
    Resolve a session's tag references to Tag records.

    Embedded Tag objects are used as-is; string ids are looked up in the
    catalog and dropped when unknown. Repeated ids are kept once.

    Args:
        session: Session whose tags to resolve.
        catalog_by_id: Tag catalog keyed by id.

    Returns:
        Resolved tags in the session's order.
    """
    resolved: list[Tag] = []
    seen: set[str] = set()
    for ref in session.tags:
        tag = catalog_by_id.get(ref) if isinstance(ref, str) else ref
        if tag is None or tag.id in seen:
            continue
        seen.add(tag.id)
        resolved.append(tag)
    return resolved


def allocate(
    sessions: Iterable[Session],
    tag_catalog: Sequence[Tag],
    range_start: date,
    range_end: date,
) -> TagAllocation:
    """
    Attribute session time to tags within a date range.

    Business context: Feeds the "how is my time split across tags" pie and
    legend. Splitting multi-tag sessions evenly keeps the pie summing to the
    real focus total instead of double counting.

    Args:
        sessions: Sessions of any type and date.
        tag_catalog: Known tags, in display order.
        range_start: First day of the range (inclusive).
        range_end: Last day of the range (inclusive).

    Returns:
        TagAllocation with ranked shares, total seconds and the number of
        qualifying sessions. Percentages sum to 100 whenever the total is
        positive.

    Example:
        >>> allocation = allocate([two_tag_30_min_session], catalog, day, day)
        >>> [s.duration_seconds for s in allocation.shares]
        [900, 900]
    """
    catalog_by_id = {tag.id: tag for tag in tag_catalog}
    catalog_order = {tag.id: index for index, tag in enumerate(tag_catalog)}

    minutes_by_tag: dict[str, float] = {}
    sessions_by_tag: dict[str, int] = {}
    tag_by_id: dict[str, Tag] = {}
    first_seen: dict[str, int] = {}
    total_minutes = 0.0
    total_sessions = 0

    for session in Config.filter_productive_sessions(sessions):
        if session.duration_minutes <= 0:
            continue
        day = session_day(session)
        if day is None or not range_start <= day <= range_end:
            continue

        tags = resolve_tags(session, catalog_by_id) or [untagged_tag()]
        per_tag = session.duration_minutes / len(tags)
        for tag in tags:
            if tag.id not in minutes_by_tag:
                minutes_by_tag[tag.id] = 0.0
                sessions_by_tag[tag.id] = 0
                tag_by_id[tag.id] = tag
                first_seen[tag.id] = len(first_seen)
            minutes_by_tag[tag.id] += per_tag
            sessions_by_tag[tag.id] += 1

        total_minutes += session.duration_minutes
        total_sessions += 1

    def rank_key(tag_id: str) -> tuple[float, int]:
        order = catalog_order.get(tag_id, len(catalog_order) + first_seen[tag_id])
        return (-minutes_by_tag[tag_id], order)

    shares = [
        TagShare(
            tag_id=tag_id,
            tag=tag_by_id[tag_id],
            duration_seconds=round(minutes_by_tag[tag_id] * 60),
            session_count=sessions_by_tag[tag_id],
            percentage_of_total=(
                minutes_by_tag[tag_id] / total_minutes * 100 if total_minutes > 0 else 0.0
            ),
        )
        for tag_id in sorted(minutes_by_tag, key=rank_key)
    ]
    return TagAllocation(
        shares=shares,
        total_duration_seconds=round(total_minutes * 60),
        total_sessions=total_sessions,
    )


def summarize_top(shares: Sequence[TagShare], limit: int = Config.LEGEND_TOP_N) -> list[LegendEntry]:
    """
    Legend rows: the top tags individually, the rest collapsed.

    Shares must already be ranked by allocate(); re-sorting them would
    detach the percentages from the display order.

    Args:
        shares: Ranked tag shares.
        limit: Number of individually listed tags. Default: 5.

    Returns:
        Up to limit tag rows, plus one "N others" row summing the duration
        and percentage of the remaining shares when there are any.

    Example:
        >>> [entry.label for entry in summarize_top(seven_shares)][-1]
        '2 others'
    """
    entries = [
        LegendEntry(
            label=share.tag.name,
            icon=share.tag.icon,
            color=share.tag.color,
            duration_seconds=share.duration_seconds,
            percentage=share.percentage_of_total,
            tag_id=share.tag_id,
        )
        for share in shares[:limit]
    ]

    remaining = shares[limit:]
    if remaining:
        entries.append(
            LegendEntry(
                label=f"{len(remaining)} others",
                icon=Config.OTHERS_ICON,
                color=Config.UNTAGGED_COLOR,
                duration_seconds=sum(s.duration_seconds for s in remaining),
                percentage=sum(s.percentage_of_total for s in remaining),
                is_others=True,
            )
        )
    return entries


def format_duration(seconds: int) -> str:
    """
    Format a legend duration.

    Example:
        >>> format_duration(45)
        '45s'
        >>> format_duration(9000)
        '2h 30m'
    """
    if seconds < 60:
        return f"{seconds}s"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours, remaining_minutes = divmod(minutes, 60)
    if remaining_minutes == 0:
        return f"{hours}h"
    return f"{hours}h {remaining_minutes}m"
