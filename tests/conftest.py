"""
Pytest configuration and shared fixtures for Focus Analytics tests.

This module contains:
- MockFileSystem: In-memory filesystem for testing without actual I/O
- SessionBook: In-memory session lookup for the analytics functions
- Shared fixtures available to all test modules
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest

from focus_analytics.config import Config
from focus_analytics.models import Session, Tag
from focus_analytics.storage import SessionStore


class MockFileSystem:
    """
    In-memory file system for testing.

    Simulates a file system using dictionaries:
    - _files: dict mapping path -> content (str)
    - _dirs: set of directory paths
    - _read_only: paths whose writes raise PermissionError

    FEATURES:
    - No actual I/O operations
    - Easy to inspect state
    - Supports write-failure simulation
    """

    def __init__(self) -> None:
        """Initialize empty mock file system."""
        self._files: dict[str, str] = {}
        self._dirs: set[str] = set()
        self._read_only: set[str] = set()

    def exists(self, path: str) -> bool:
        """Check if path is a mock file or directory."""
        return path in self._files or path in self._dirs

    def is_dir(self, path: str) -> bool:
        """Check if path is a mock directory."""
        return path in self._dirs

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create mock directory and parent directories.

        Raises:
            OSError: If directory exists and exist_ok is False,
                or if path is an existing file.
        """
        if path in self._dirs:
            if not exist_ok:
                raise OSError(f"Directory exists: {path}")
            return

        if path in self._files:
            raise OSError(f"Path is a file, not directory: {path}")

        parts = path.rstrip("/").split("/")
        for i in range(1, len(parts) + 1):
            parent = "/".join(parts[:i])
            if parent:
                self._dirs.add(parent)

    def read_text(self, path: str, _encoding: str = "utf-8") -> str:
        """
        Read mock file contents.

        Raises:
            FileNotFoundError: If path not in _files.
        """
        if path not in self._files:
            raise FileNotFoundError(f"No such file: {path}")
        return self._files[path]

    def write_text(self, path: str, content: str, _encoding: str = "utf-8") -> None:
        """
        Write text to mock file, creating parent directories.

        Raises:
            PermissionError: If path is marked read-only.
        """
        if path in self._read_only:
            raise PermissionError(f"Permission denied: {path}")

        parent = "/".join(path.rstrip("/").split("/")[:-1])
        if parent and parent not in self._dirs:
            self.makedirs(parent, exist_ok=True)

        self._files[path] = content

    def rename(self, src: str, dst: str) -> None:
        """
        Move a mock file, replacing dst.

        Raises:
            FileNotFoundError: If source doesn't exist.
            PermissionError: If dst is marked read-only.
        """
        if src not in self._files:
            raise FileNotFoundError(f"No such file: {src}")
        if dst in self._read_only:
            raise PermissionError(f"Permission denied: {dst}")
        self._files[dst] = self._files.pop(src)

    # =========================================================================
    # TEST HELPERS
    # =========================================================================

    def get_file(self, path: str) -> str | None:
        """Get file content or None if not exists."""
        return self._files.get(path)

    def set_file(self, path: str, content: str) -> None:
        """Set file content directly."""
        self.write_text(path, content)

    def set_read_only(self, path: str) -> None:
        """Make writes and renames onto path fail with PermissionError."""
        self._read_only.add(path)

    def list_files(self) -> list[str]:
        """Sorted list of all file paths."""
        return sorted(self._files.keys())

    def clear(self) -> None:
        """Clear all files and directories."""
        self._files.clear()
        self._dirs.clear()
        self._read_only.clear()


class SessionBook:
    """
    In-memory session lookup keyed by date.

    Callable as the analytics functions expect: book(day) -> sessions.
    Records every day it was asked for in `calls`.

    Example:
        >>> book = SessionBook()
        >>> book.add(date(2026, 10, 18), "09:00", "10:00")
        >>> len(book(date(2026, 10, 18)))
        1
    """

    def __init__(self) -> None:
        self._by_day: dict[date, list[Session]] = {}
        self.calls: list[date] = []

    def add(
        self,
        day: date,
        start_time: str,
        end_time: str,
        session_type: str = "focus",
        tags: list[Tag | str] | None = None,
        duration_minutes: int | None = None,
    ) -> Session:
        """Create and file a session under day."""
        session = make_session(day, start_time, end_time, session_type, tags, duration_minutes)
        self._by_day.setdefault(day, []).append(session)
        return session

    def __call__(self, day: date) -> list[Session]:
        self.calls.append(day)
        return list(self._by_day.get(day, []))


def make_session(
    day: date,
    start_time: str,
    end_time: str,
    session_type: str = "focus",
    tags: list[Tag | str] | None = None,
    duration_minutes: int | None = None,
) -> Session:
    """
    Build a session for tests.

    Unlike Session.create, a malformed time range (end before start) is
    accepted with a zero duration so clamping behavior can be exercised.
    """
    if duration_minutes is None:
        try:
            return Session.create(day.isoformat(), start_time, end_time, session_type, tags)
        except ValueError:
            duration_minutes = 0
    return Session.create(
        day.isoformat(), start_time, end_time, session_type, tags, duration_minutes
    )


@pytest.fixture(autouse=True)
def reset_config() -> Iterator[None]:
    """Clear Config overrides after every test."""
    yield
    Config.reset_test_overrides()


@pytest.fixture
def mock_fs() -> MockFileSystem:
    """
    Create a MockFileSystem for testing.

    Provides a fresh in-memory filesystem instance for each test,
    ensuring test isolation without actual disk I/O.
    """
    return MockFileSystem()


@pytest.fixture
def store(mock_fs: MockFileSystem) -> SessionStore:
    """SessionStore at /test/storage backed by the mock filesystem."""
    return SessionStore(storage_dir="/test/storage", filesystem=mock_fs)


@pytest.fixture
def book() -> SessionBook:
    """Empty in-memory session lookup."""
    return SessionBook()


@pytest.fixture
def catalog() -> list[Tag]:
    """A small tag catalog in display order."""
    return [
        Tag(id="work", name="Work", icon="ri-briefcase-line", color="#3b82f6"),
        Tag(id="study", name="Study", icon="ri-book-line", color="#22c55e"),
        Tag(id="code", name="Code", icon="ri-code-line", color="#f59e0b"),
    ]
