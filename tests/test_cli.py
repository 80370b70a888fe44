"""Tests for CLI module."""

from __future__ import annotations

import json
import sys
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add tests directory to path for conftest imports
sys.path.insert(0, str(Path(__file__).parent))

from conftest import MockFileSystem
from focus_analytics.cli import main, run_add, run_report, run_tags
from focus_analytics.models import Session, Tag
from focus_analytics.statistics import AnalyticsEngine
from focus_analytics.storage import SessionStore


class TestCLIParsing:
    """Tests for CLI argument parsing and dispatch."""

    def test_main_defaults_to_report(self) -> None:
        """Verifies a bare invocation prints today's report.

        Business context:
        `focus-analytics` with no arguments should answer "how am I doing
        today" without further typing.

        Arrangement:
        Mock sys.argv with just the program name and mock run_report.

        Action:
        Call main().

        Assertion Strategy:
        Exit code 0 and run_report called with today's date.
        """
        with (
            patch.object(sys, "argv", ["focus-analytics"]),
            patch("focus_analytics.cli.run_report") as mock_run,
        ):
            result = main()

        assert result == 0
        mock_run.assert_called_once_with(date.today())

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--version prints the version and exits."""
        from focus_analytics.__version__ import __version__

        with patch.object(sys, "argv", ["focus-analytics", "--version"]), pytest.raises(SystemExit):
            main()

        assert __version__ in capsys.readouterr().out

    def test_report_with_date(self) -> None:
        """report --date passes the parsed day."""
        with (
            patch.object(sys, "argv", ["focus-analytics", "report", "--date", "2026-10-18"]),
            patch("focus_analytics.cli.run_report") as mock_run,
        ):
            assert main() == 0

        mock_run.assert_called_once_with(date(2026, 10, 18))

    def test_report_with_invalid_date(self, caplog: pytest.LogCaptureFixture) -> None:
        """An invalid --date exits with 1 and logs the error."""
        with (
            patch.object(sys, "argv", ["focus-analytics", "report", "--date", "18.10.2026"]),
            patch("focus_analytics.cli.run_report") as mock_run,
        ):
            assert main() == 1

        mock_run.assert_not_called()
        assert "Invalid isoformat string" in caplog.text

    def test_dashboard_command(self) -> None:
        """dashboard forwards host and port."""
        with (
            patch("focus_analytics.cli.run_dashboard") as mock_run,
            patch.object(
                sys, "argv", ["focus-analytics", "dashboard", "--host", "0.0.0.0", "--port", "9000"]
            ),
        ):
            assert main() == 0

        mock_run.assert_called_once_with(host="0.0.0.0", port=9000)

    def test_dashboard_defaults(self) -> None:
        """dashboard without flags uses the configured defaults."""
        with (
            patch("focus_analytics.cli.run_dashboard") as mock_run,
            patch.object(sys, "argv", ["focus-analytics", "dashboard"]),
        ):
            main()

        mock_run.assert_called_once_with(host="127.0.0.1", port=8000)

    def test_tags_command(self) -> None:
        """tags dispatches to run_tags."""
        with (
            patch("focus_analytics.cli.run_tags") as mock_run,
            patch.object(sys, "argv", ["focus-analytics", "tags"]),
        ):
            assert main() == 0

        mock_run.assert_called_once_with()


class TestAddCommand:
    """Tests for the add subcommand."""

    def test_add_dispatch(self) -> None:
        """add passes date, times, type and repeated tags."""
        argv = [
            "focus-analytics", "add", "--date", "2026-10-18", "--start", "09:00",
            "--end", "09:25", "--type", "custom", "--tag", "work", "--tag", "code",
        ]  # fmt: skip
        with (
            patch.object(sys, "argv", argv),
            patch("focus_analytics.cli.run_add", return_value=True) as mock_run,
        ):
            assert main() == 0

        mock_run.assert_called_once_with(date(2026, 10, 18), "09:00", "09:25", "custom", ["work", "code"])

    @pytest.mark.parametrize(
        ("start", "end"),
        [("9am", "10:00"), ("09:00", "25:00"), ("10:00", "09:00"), ("09:00", "09:00")],
    )
    def test_add_invalid_times_exit_1(
        self, start: str, end: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Verifies bad times are rejected before anything is written.

        Business context:
        A reversed or malformed entry would silently become zero minutes
        in every chart; refusing it at entry time is the useful behavior.

        Arrangement:
        argv with an invalid or reversed time range; the store is mocked.

        Action:
        Call main().

        Assertion Strategy:
        Exit code 1, an error logged, and no session written.
        """
        argv = ["focus-analytics", "add", "--start", start, "--end", end]
        with (
            patch.object(sys, "argv", argv),
            patch("focus_analytics.storage.SessionStore") as mock_store,
        ):
            assert main() == 1

        mock_store.return_value.add_session.assert_not_called()
        assert "ERROR" in caplog.text

    def test_add_unknown_type_rejected_by_parser(self) -> None:
        """--type only accepts known session types."""
        argv = ["focus-analytics", "add", "--start", "09:00", "--end", "09:25", "--type", "nap"]
        with patch.object(sys, "argv", argv), pytest.raises(SystemExit):
            main()

    def test_add_write_failure_exit_1(self) -> None:
        """A failed write is reported with exit code 1."""
        argv = ["focus-analytics", "add", "--start", "09:00", "--end", "09:25"]
        with (
            patch.object(sys, "argv", argv),
            patch("focus_analytics.cli.run_add", return_value=False),
        ):
            assert main() == 1


class TestRunAdd:
    """Tests for run_add against a mock-backed store."""

    def test_writes_session(self, store: SessionStore, mock_fs: MockFileSystem) -> None:
        """The session lands under its date with a derived duration."""
        store.add_tag(Tag(id="work", name="Work"))

        assert run_add(date(2026, 10, 18), "09:00", "09:25", tags=["work"], store=store) is True

        stored = json.loads(mock_fs.get_file("/test/storage/sessions.json") or "")
        record = stored["2026-10-18"][0]
        assert record["duration_minutes"] == 25
        assert record["tags"] == ["work"]

    def test_warns_about_unknown_tag(
        self, store: SessionStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Tags missing from the catalog are stored but flagged."""
        run_add(date(2026, 10, 18), "09:00", "09:25", tags=["ghost"], store=store)
        assert "not in the catalog" in caplog.text

    def test_rejects_unknown_type(self, store: SessionStore) -> None:
        """Unknown session types raise ValueError."""
        with pytest.raises(ValueError, match="Unknown session type"):
            run_add(date(2026, 10, 18), "09:00", "09:25", "nap", store=store)


class TestRunReport:
    """Tests for run_report output."""

    def test_prints_report(self, store: SessionStore, capsys: pytest.CaptureFixture[str]) -> None:
        """The report for the requested day is printed to stdout."""
        store.add_session(Session.create("2026-10-18", "09:00", "10:00"))

        run_report(date(2026, 10, 18), store=store, engine=AnalyticsEngine())

        out = capsys.readouterr().out
        assert "REPORT FOR 2026-10-18" in out
        assert "Today: 1h" in out

    def test_uses_injected_engine(self, store: SessionStore) -> None:
        """A supplied engine generates the report."""
        engine = MagicMock()
        engine.generate_summary_report.return_value = "report"

        run_report(date(2026, 10, 18), store=store, engine=engine)

        now = engine.generate_summary_report.call_args.args[0]
        assert now.date() == date(2026, 10, 18)


class TestRunTags:
    """Tests for run_tags output."""

    def test_lists_catalog(
        self, store: SessionStore, catalog: list[Tag], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """One line per tag with id, name and color."""
        store.save_tags(catalog)

        run_tags(store=store)

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "work\tWork\t#3b82f6"
        assert len(lines) == 3

    def test_empty_catalog(self, store: SessionStore, capsys: pytest.CaptureFixture[str]) -> None:
        """An empty catalog says so."""
        run_tags(store=store)
        assert "No tags defined" in capsys.readouterr().out
