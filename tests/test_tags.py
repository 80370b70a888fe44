"""Tests for tags module."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Add tests directory to path for conftest imports
sys.path.insert(0, str(Path(__file__).parent))

from conftest import make_session
from focus_analytics.config import Config
from focus_analytics.models import Session, Tag, TagShare
from focus_analytics.tags import (
    allocate,
    format_duration,
    resolve_tags,
    session_day,
    summarize_top,
    untagged_tag,
)

DAY = date(2026, 10, 18)


class TestUntaggedTag:
    """Test suite for the synthetic Untagged record."""

    def test_fields(self) -> None:
        """Untagged has a fixed id, name, icon and neutral color."""
        tag = untagged_tag()
        assert tag == Tag(id="untagged", name="Untagged", icon="ri-price-tag-line", color="#6b7280")


class TestSessionDay:
    """Test suite for a session's calendar day."""

    def test_prefers_date(self) -> None:
        """The session's own date wins."""
        assert session_day(make_session(DAY, "09:00", "09:30")) == DAY

    def test_falls_back_to_created_at(self) -> None:
        """Without a date the created_at timestamp decides."""
        session = Session(
            id="s1",
            start_time="09:00",
            end_time="09:30",
            duration_minutes=30,
            created_at="2026-10-17T09:30:00+00:00",
        )
        assert session_day(session) == date(2026, 10, 17)

    def test_no_usable_date(self) -> None:
        """Neither field usable gives None."""
        session = Session(id="s1", start_time="", end_time="", duration_minutes=5, created_at="n/a")
        assert session_day(session) is None


class TestResolveTags:
    """Test suite for tag reference resolution."""

    def test_mixed_references(self, catalog: list[Tag]) -> None:
        """Ids resolve through the catalog, embedded tags pass through."""
        embedded = Tag(id="side", name="Side project")
        session = make_session(DAY, "09:00", "09:30", tags=["work", embedded, "ghost", "work"])

        resolved = resolve_tags(session, {t.id: t for t in catalog})

        assert [t.id for t in resolved] == ["work", "side"]


class TestAllocate:
    """Test suite for tag duration allocation.

    Categories:
    1. Even split across multiple tags
    2. Untagged fallback
    3. Filtering by type, duration and date range
    4. Ranking and totals
    """

    def test_two_tags_split_evenly(self, catalog: list[Tag]) -> None:
        """Verifies a 30-minute session with two tags gives 15 minutes each.

        Business context:
        Splitting keeps the pie chart summing to real focus time; counting
        the full 30 minutes for both tags would show 60 minutes.

        Arrangement:
        One 30-minute focus session tagged work and study.

        Action:
        Allocate over the session's day.

        Assertion Strategy:
        900 seconds per tag, 50% each, both count the session once, and
        the allocation totals 1800 seconds in 1 session.
        """
        session = make_session(DAY, "09:00", "09:30", tags=["work", "study"])

        allocation = allocate([session], catalog, DAY, DAY)

        assert [(s.tag_id, s.duration_seconds) for s in allocation.shares] == [
            ("work", 900),
            ("study", 900),
        ]
        assert [s.percentage_of_total for s in allocation.shares] == pytest.approx([50.0, 50.0])
        assert [s.session_count for s in allocation.shares] == [1, 1]
        assert allocation.total_duration_seconds == 1800
        assert allocation.total_sessions == 1

    def test_untagged_session(self, catalog: list[Tag]) -> None:
        """A session without tags goes entirely to Untagged."""
        allocation = allocate([make_session(DAY, "09:00", "09:30")], catalog, DAY, DAY)

        assert len(allocation.shares) == 1
        share = allocation.shares[0]
        assert share.tag_id == Config.UNTAGGED_ID
        assert share.duration_seconds == 1800
        assert share.percentage_of_total == pytest.approx(100.0)

    def test_unknown_ids_fall_back_to_untagged(self, catalog: list[Tag]) -> None:
        """Tags that resolve to nothing leave the session untagged."""
        session = make_session(DAY, "09:00", "09:30", tags=["deleted-tag"])
        allocation = allocate([session], catalog, DAY, DAY)
        assert [s.tag_id for s in allocation.shares] == ["untagged"]

    def test_filters_breaks_zero_duration_and_range(self, catalog: list[Tag]) -> None:
        """Only productive, positive, in-range sessions are allocated."""
        sessions = [
            make_session(DAY, "09:00", "09:30", tags=["work"]),
            make_session(DAY, "10:00", "10:15", "break", tags=["work"]),
            make_session(DAY, "11:00", "11:00", tags=["work"]),
            make_session(date(2026, 10, 10), "09:00", "10:00", tags=["work"]),
        ]

        allocation = allocate(sessions, catalog, date(2026, 10, 12), DAY)

        assert allocation.total_sessions == 1
        assert allocation.total_duration_seconds == 1800

    def test_ranking_and_percentages(self, catalog: list[Tag]) -> None:
        """Shares rank by duration; ties keep catalog order; sum is 100."""
        sessions = [
            make_session(DAY, "09:00", "09:20", tags=["code"]),
            make_session(DAY, "10:00", "10:20", tags=["study"]),
            make_session(DAY, "11:00", "12:00", tags=["work", "code"]),
            make_session(DAY, "13:00", "13:10"),
        ]

        allocation = allocate(sessions, catalog, DAY, DAY)

        assert [s.tag_id for s in allocation.shares] == ["code", "work", "study", "untagged"]
        assert [s.duration_seconds for s in allocation.shares] == [3000, 1800, 1200, 600]
        assert sum(s.percentage_of_total for s in allocation.shares) == pytest.approx(100.0)
        assert allocation.shares[0].session_count == 2

    def test_empty_input(self, catalog: list[Tag]) -> None:
        """No sessions gives no shares and zero totals."""
        allocation = allocate([], catalog, DAY, DAY)
        assert allocation.shares == []
        assert allocation.total_duration_seconds == 0
        assert allocation.total_sessions == 0

    def test_is_repeatable(self, catalog: list[Tag]) -> None:
        """Identical inputs give identical outputs."""
        sessions = [make_session(DAY, "09:00", "09:30", tags=["work", "study"])]
        assert allocate(sessions, catalog, DAY, DAY) == allocate(sessions, catalog, DAY, DAY)


def _share(tag_id: str, seconds: int, percentage: float) -> TagShare:
    tag = Tag(id=tag_id, name=tag_id.title(), icon=f"ri-{tag_id}", color="#000000")
    return TagShare(
        tag_id=tag_id, tag=tag, duration_seconds=seconds, session_count=1, percentage_of_total=percentage
    )


class TestSummarizeTop:
    """Test suite for legend truncation."""

    def test_collapses_remainder(self) -> None:
        """Seven shares give five tag rows plus a "2 others" row."""
        shares = [_share(f"t{i}", 700 - i * 100, 10.0) for i in range(7)]

        entries = summarize_top(shares)

        assert len(entries) == 6
        assert [e.label for e in entries[:5]] == ["T0", "T1", "T2", "T3", "T4"]
        others = entries[-1]
        assert others.label == "2 others"
        assert others.is_others is True
        assert others.icon == "ri-more-line"
        assert others.duration_seconds == 200 + 100
        assert others.percentage == pytest.approx(20.0)

    def test_no_others_row_within_limit(self) -> None:
        """Five or fewer shares are all listed individually."""
        entries = summarize_top([_share("a", 60, 50.0), _share("b", 60, 50.0)])
        assert [e.tag_id for e in entries] == ["a", "b"]
        assert not any(e.is_others for e in entries)

    def test_custom_limit(self) -> None:
        """A smaller limit collapses earlier."""
        entries = summarize_top([_share(t, 60, 25.0) for t in "abcd"], limit=2)
        assert [e.label for e in entries] == ["A", "B", "2 others"]


class TestFormatDuration:
    """Test suite for legend duration strings."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0s"), (45, "45s"), (60, "1m"), (1500, "25m"), (3600, "1h"), (9000, "2h 30m")],
    )
    def test_format(self, seconds: int, expected: str) -> None:
        """Seconds, minutes and hours display compactly."""
        assert format_duration(seconds) == expected
