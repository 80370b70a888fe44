"""
FileSystem abstraction for Focus Analytics.

PURPOSE: Injectable file system interface for the session store.
AI CONTEXT: Lets tests swap disk I/O for an in-memory implementation.

DESIGN:
- Protocol defines the interface
- RealFileSystem uses actual os operations
- MockFileSystem in tests/conftest.py stores data in memory for tests

USAGE:
    # Production
    store = SessionStore(filesystem=RealFileSystem())

    # Tests (MockFileSystem from conftest.py)
    store = SessionStore(storage_dir="/test", filesystem=mock_fs)
"""

from __future__ import annotations

import os
from typing import Protocol

__all__ = ["FileSystem", "RealFileSystem"]


class FileSystem(Protocol):
    """
    Protocol for the file operations the session store needs.

    All paths are plain strings. Writes go through a temporary file and
    rename() so a crash mid-write never leaves a truncated sessions.json.
    """

    def exists(self, path: str) -> bool:
        """Return True if path exists as a file or directory. Never raises."""
        ...

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create a directory and its parents, like `mkdir -p`.

        Raises:
            OSError: If the directory exists and exist_ok is False.
        """
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """
        Read a whole file as text.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """
        Write text to a file, replacing any previous content.

        Raises:
            OSError: If the parent directory is missing or not writable.
        """
        ...

    def rename(self, src: str, dst: str) -> None:
        """
        Move src to dst, replacing dst if it exists.

        Raises:
            FileNotFoundError: If src does not exist.
        """
        ...


class RealFileSystem:
    """
    Real file system implementation using the os module.

    Business context: Used in production to keep sessions and tags on disk.
    Each method delegates directly to the corresponding os or built-in call.
    """

    def exists(self, path: str) -> bool:  # pragma: no cover
        """Delegate to os.path.exists()."""
        return os.path.exists(path)

    def makedirs(self, path: str, exist_ok: bool = False) -> None:  # pragma: no cover
        """Delegate to os.makedirs()."""
        os.makedirs(path, exist_ok=exist_ok)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:  # pragma: no cover
        """Read file contents from disk as text."""
        with open(path, encoding=encoding) as f:
            return f.read()

    def write_text(
        self, path: str, content: str, encoding: str = "utf-8"
    ) -> None:  # pragma: no cover
        """Write text content to a file on disk."""
        with open(path, "w", encoding=encoding) as f:
            f.write(content)

    def rename(self, src: str, dst: str) -> None:  # pragma: no cover
        """Delegate to os.replace() so an existing dst is overwritten."""
        os.replace(src, dst)
