"""
Interval bucketing for Focus Analytics.

PURPOSE: Split a session's active interval across fixed time buckets.
AI CONTEXT: Pure functions - no I/O, no logging, no shared state.

BUCKET MODEL:
- Intervals are half-open [start, end) in minutes of day
- A bucket i covers [i * width, (i + 1) * width)
- A minute sitting exactly on a boundary belongs to the later bucket
- Buckets outside [0, bucket_count) are dropped, never wrapped

MALFORMED SESSIONS:
A session whose end is not after its start (including cross-midnight
entries such as 23:30-00:15) is clamped to zero length. Callers that need
to surface this use count_malformed_sessions().

USAGE:
    bucketize_interval(13 * 60 + 50, 14 * 60 + 10, 60, 24)
    # {13: 10, 14: 10}
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .config import Config

if TYPE_CHECKING:
    from .models import Session

__all__ = [
    "time_to_minutes",
    "session_interval",
    "bucketize_interval",
    "hourly_distribution",
    "minutes_before",
    "count_malformed_sessions",
]


def time_to_minutes(value: str) -> int:
    """
    Parse an "HH:MM" wall-clock time into minutes since midnight.

    Args:
        value: Time string. Hours 0-24, minutes 0-59; "24:00" is accepted
            as the end of the day.

    Returns:
        Minutes since midnight, 0-1440.

    Raises:
        ValueError: If the string is not "HH:MM" or is out of range.

    Example:
        >>> time_to_minutes('14:15')
        855
    """
    hours_text, sep, minutes_text = value.strip().partition(":")
    if not sep or not hours_text.isdigit() or not minutes_text.isdigit():
        raise ValueError(f"Invalid time of day: {value!r}")
    hours, minutes = int(hours_text), int(minutes_text)
    if minutes > 59 or hours > 24 or (hours == 24 and minutes > 0):
        raise ValueError(f"Time of day out of range: {value!r}")
    return hours * 60 + minutes


def session_interval(session: Session) -> tuple[int, int]:
    """
    Get a session's clamped [start, end) interval in minutes of day.

    Unparseable or missing times give (0, 0). An end at or before the start is
    clamped to the start so the interval has zero length.

    Args:
        session: Session with "HH:MM" start_time and end_time.

    Returns:
        Tuple (start, end) with start <= end.

    Example:
        >>> session_interval(Session.create('2026-10-18', '23:30', '00:15'))
        (1410, 1410)
    """
    try:
        start = time_to_minutes(session.start_time)
        end = time_to_minutes(session.end_time)
    except (ValueError, AttributeError, TypeError):
        return (0, 0)
    return (start, max(start, end))


def bucketize_interval(
    start: int,
    end: int,
    width: int = Config.MINUTES_PER_HOUR,
    bucket_count: int = Config.HOURS_PER_DAY,
) -> dict[int, int]:
    """
    Distribute an interval's minutes over the buckets it overlaps.

    Walks bucket indices from floor(start / width) to floor((end - 1) / width)
    and records min(end, bucket_end) - max(start, bucket_start) for each.

    Business context: A 13:50-14:10 session is ten minutes of focus in each
    of two hours. Attributing it all to its start hour would misplace the
    peak for sessions that straddle the hour.

    Args:
        start: Interval start in minutes.
        end: Interval end in minutes (exclusive).
        width: Bucket width in minutes. Default: 60 (hour of day).
        bucket_count: Number of valid buckets. Default: 24.

    Returns:
        Dict of bucket index -> overlap minutes for every touched bucket in
        range. Empty for zero-length or reversed intervals.

    Example:
        >>> bucketize_interval(855, 885)
        {14: 30}
        >>> bucketize_interval(830, 850)
        {13: 10, 14: 10}
    """
    overlaps: dict[int, int] = {}
    if end <= start or width <= 0:
        return overlaps

    for index in range(start // width, (end - 1) // width + 1):
        if index < 0 or index >= bucket_count:
            continue
        bucket_start = index * width
        overlap = min(end, bucket_start + width) - max(start, bucket_start)
        if overlap > 0:
            overlaps[index] = overlap
    return overlaps


def hourly_distribution(sessions: Iterable[Session]) -> list[float]:
    """
    Build the 24-slot minute series of one day's productive sessions.

    Args:
        sessions: Sessions of a single day, any type.

    Returns:
        List of 24 floats; slot h holds focus minutes overlapping hour h.

    Example:
        >>> hourly_distribution([Session.create('2026-10-18', '13:50', '14:10')])[13:15]
        [10.0, 10.0]
    """
    series = [0.0] * Config.HOURS_PER_DAY
    for session in Config.filter_productive_sessions(sessions):
        start, end = session_interval(session)
        for hour, minutes in bucketize_interval(start, end).items():
            series[hour] += minutes
    return series


def minutes_before(session: Session, cutoff: int) -> int:
    """
    Minutes of a session that fall before a cutoff minute of day.

    A session starting at or after the cutoff contributes nothing; one that
    spans it is clipped at the cutoff.

    Args:
        session: Session to measure.
        cutoff: Minute of day (exclusive upper bound).

    Returns:
        Overlap of the session with [0, cutoff), never negative.

    Example:
        >>> minutes_before(Session.create('2026-10-18', '09:00', '10:00'), 9 * 60 + 20)
        20
    """
    start, end = session_interval(session)
    return max(0, min(end, cutoff) - start)


def count_malformed_sessions(sessions: Iterable[Session]) -> int:
    """
    Count sessions whose end time is not after their start time.

    These sessions are clamped to zero contribution by every bucketing
    function. The count lets a caller report the silent data loss.

    Args:
        sessions: Sessions of any type.

    Returns:
        Number of sessions with unparseable times or end <= start.
    """
    count = 0
    for session in sessions:
        start, end = session_interval(session)
        if end <= start:
            count += 1
    return count
