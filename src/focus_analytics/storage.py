"""
Session storage for Focus Analytics.

PURPOSE: JSON-file Session Store and Tag Catalog with fail-safe I/O.
AI CONTEXT: The analytics core never touches this module; it only receives
the get_sessions_for_date lookup.

STORAGE STRUCTURE:
    .focus_analytics/
    ├── sessions.json  # Dict: ISO date -> [session records]
    └── tags.json      # List: tag records in display order

ERROR HANDLING STRATEGY:
- File not found: Return empty structure (dict or list)
- JSON corruption: Log error, return empty structure
- Bad record (missing id, wrong shape): Log warning, skip the record
- Write failure: Log error, return False

CACHING:
Day lookups are served from the date-keyed map loaded on first use, so a
year-long aggregation parses sessions.json once. Every sessions write drops
the map; refresh() drops it after external edits.

USAGE:
    # Production
    store = SessionStore()
    sessions = store.get_sessions_for_date(date.today())

    # Testing with MockFileSystem
    store = SessionStore(storage_dir="/test", filesystem=mock_fs)
"""

from __future__ import annotations

import json
import logging
import os
from datetime import date
from typing import TYPE_CHECKING, Any

from .config import Config
from .filesystem import RealFileSystem
from .models import Session, Tag

if TYPE_CHECKING:
    from .filesystem import FileSystem

__all__ = ["SessionStore"]

logger = logging.getLogger(__name__)


class SessionStore:
    """
    JSON-backed session store and tag catalog.

    DESIGN PRINCIPLES:
    1. Fail-safe: Never raise on I/O errors
    2. Predictable: Always return valid data structures
    3. One parse per instance: Day lookups share a cached map, writes invalidate it
    4. Testable: FileSystem can be injected for mocking

    THREAD SAFETY:
    Not thread-safe. Single writer assumed (one CLI or dashboard process).
    """

    def __init__(
        self,
        storage_dir: str | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """
        Initialize storage with directory structure.

        Args:
            storage_dir: Custom storage path. Default: Config.get_storage_dir()
            filesystem: FileSystem implementation. Default: RealFileSystem

        Creates:
            - Storage directory
            - Empty sessions.json and tags.json if missing
        """
        self.storage_dir = storage_dir or Config.get_storage_dir()
        self._fs: FileSystem = filesystem or RealFileSystem()
        self.sessions_file = os.path.join(self.storage_dir, Config.SESSIONS_FILE)
        self.tags_file = os.path.join(self.storage_dir, Config.TAGS_FILE)
        self._sessions_cache: dict[str, list[dict[str, Any]]] | None = None

        self._initialize_storage()

    def _initialize_storage(self) -> None:
        """Create the directory and empty files; log instead of raising."""
        try:
            self._fs.makedirs(self.storage_dir, exist_ok=True)
            if not self._fs.exists(self.sessions_file):
                self._write_json(self.sessions_file, {})
            if not self._fs.exists(self.tags_file):
                self._write_json(self.tags_file, [])
            logger.info(f"Storage initialized: {self.storage_dir}")
        except OSError as e:
            logger.error(f"Failed to initialize storage: {e}")

    def _read_json(self, file_path: str, default: Any) -> Any:
        """
        Read JSON file with error handling.

        Args:
            file_path: Path to JSON file
            default: Value to return on any error or type mismatch

        Returns:
            Parsed JSON data, or default.
        """
        try:
            content = self._fs.read_text(file_path)
            data = json.loads(content)
        except FileNotFoundError:
            return default
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {file_path}: {e}")
            return default
        except OSError as e:
            logger.error(f"Error reading {file_path}: {e}")
            return default

        if not isinstance(data, type(default)):
            logger.error(f"Unexpected top-level type in {file_path}: {type(data).__name__}")
            return default
        return data

    def _write_json(self, file_path: str, data: Any) -> bool:
        """
        Write JSON through a temporary file and rename.

        Returns:
            True on success, False on failure.
        """
        tmp_path = f"{file_path}.tmp"
        if file_path == self.sessions_file:
            self._sessions_cache = None
        try:
            content = json.dumps(data, indent=2, default=str)
            self._fs.write_text(tmp_path, content)
            self._fs.rename(tmp_path, file_path)
            return True
        except OSError as e:
            logger.error(f"Error writing {file_path}: {e}")
            return False

    # =========================================================================
    # SESSION OPERATIONS
    # =========================================================================

    def load_raw_sessions(self) -> dict[str, list[dict[str, Any]]]:
        """
        Load the date-keyed session mapping as stored.

        Returns:
            Dict of ISO date -> list of session dicts. Empty if unavailable.
        """
        result: dict[str, list[dict[str, Any]]] = self._read_json(self.sessions_file, {})
        return result

    def refresh(self) -> None:
        """Drop the cached session map so the next lookup re-reads the file."""
        self._sessions_cache = None

    def _session_map(self) -> dict[str, list[dict[str, Any]]]:
        if self._sessions_cache is None:
            self._sessions_cache = self.load_raw_sessions()
        return self._sessions_cache

    def get_sessions_for_date(self, day: date) -> list[Session]:
        """
        All sessions (any type) dated on a calendar day.

        This is the lookup the analytics functions take. It reads from the
        cached session map, so calling it once per day of a year costs one
        file parse. Records that cannot be parsed are skipped with a warning.

        Args:
            day: Calendar day.

        Returns:
            Sessions in stored order. Empty when the day has none.

        Example:
            >>> store.get_sessions_for_date(date(2026, 10, 18))
            [Session(id='...', start_time='09:00', ...)]
        """
        key = day.isoformat()
        records = self._session_map().get(key, [])
        if not isinstance(records, list):
            logger.warning(f"Ignoring non-list session entry for {key}")
            return []

        sessions: list[Session] = []
        for record in records:
            try:
                sessions.append(Session.from_dict(record, day=key))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed session record on {key}: {e}")
        return sessions

    def add_session(self, session: Session) -> bool:
        """
        Append a session under its date.

        Args:
            session: Session with date set.

        Returns:
            True on success. False when the session has no date or the write
            failed.
        """
        if not session.date:
            logger.error(f"Cannot store session {session.id} without a date")
            return False
        sessions = self.load_raw_sessions()
        sessions.setdefault(session.date, []).append(session.to_dict())
        return self._write_json(self.sessions_file, sessions)

    def update_session(self, session: Session) -> bool:
        """
        Replace a stored session by id, moving it if its date changed.

        Returns:
            True on success, False if the id is unknown or the write failed.
        """
        sessions = self.load_raw_sessions()
        if not self._remove_record(sessions, session.id):
            return False
        if not session.date:
            logger.error(f"Cannot store session {session.id} without a date")
            return False
        sessions.setdefault(session.date, []).append(session.to_dict())
        return self._write_json(self.sessions_file, sessions)

    def delete_session(self, session_id: str) -> bool:
        """
        Delete a session by id.

        Returns:
            True if found and written, False otherwise.
        """
        sessions = self.load_raw_sessions()
        if not self._remove_record(sessions, session_id):
            return False
        return self._write_json(self.sessions_file, sessions)

    @staticmethod
    def _remove_record(sessions: dict[str, list[dict[str, Any]]], session_id: str) -> bool:
        """Remove a record in place; drop the date key when it empties."""
        for key, records in list(sessions.items()):
            remaining = [r for r in records if r.get("id") != session_id]
            if len(remaining) != len(records):
                if remaining:
                    sessions[key] = remaining
                else:
                    del sessions[key]
                return True
        return False

    # =========================================================================
    # TAG OPERATIONS
    # =========================================================================

    def load_tags(self) -> list[Tag]:
        """
        Load the tag catalog in display order.

        Returns:
            List of Tag records. Entries without an id are skipped.
        """
        tags: list[Tag] = []
        for record in self._read_json(self.tags_file, []):
            try:
                tags.append(Tag.from_dict(record))
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed tag record: {e}")
        return tags

    def save_tags(self, tags: list[Tag]) -> bool:
        """Replace the tag catalog."""
        return self._write_json(self.tags_file, [t.to_dict() for t in tags])

    def add_tag(self, tag: Tag) -> bool:
        """
        Append a tag to the catalog, replacing any tag with the same id.

        Returns:
            True on success.
        """
        tags = [t for t in self.load_tags() if t.id != tag.id]
        tags.append(tag)
        return self.save_tags(tags)

    # =========================================================================
    # MAINTENANCE OPERATIONS
    # =========================================================================

    def clear_all(self) -> bool:
        """
        Reset sessions and tags to empty.

        WARNING: Destroys all data.

        Returns:
            True if both writes succeeded.
        """
        success = True
        success &= self._write_json(self.sessions_file, {})
        success &= self._write_json(self.tags_file, [])
        if success:
            logger.info("All data files cleared")
        return success
