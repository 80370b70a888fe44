"""Main test module for focus-analytics."""

import runpy
import sys
from unittest.mock import patch

import pytest

import focus_analytics


class TestVersion:
    """Test version information."""

    def test_version_exists(self) -> None:
        """The package exposes a version string."""
        assert focus_analytics.__version__ is not None

    def test_version_format(self) -> None:
        """Verifies version follows semantic versioning format.

        Business context:
        Semantic versioning communicates compatibility to anyone
        installing the package.

        Assertion Strategy:
        Validates 3 parts, all numeric.
        """
        parts = focus_analytics.__version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)

    def test_title_exists(self) -> None:
        """The package exposes its title."""
        assert focus_analytics.__title__ == "focus_analytics"


class TestModuleExecution:
    """Test `python -m focus_analytics`."""

    def test_runs_cli_main(self) -> None:
        """Module execution exits with the CLI's return code."""
        with (
            patch("focus_analytics.cli.main", return_value=0) as mock_main,
            patch.object(sys, "argv", ["focus_analytics"]),
            pytest.raises(SystemExit) as exc_info,
        ):
            runpy.run_module("focus_analytics", run_name="__main__")

        assert exc_info.value.code == 0
        mock_main.assert_called_once_with()
