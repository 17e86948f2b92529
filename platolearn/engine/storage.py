"""
ProgressStore - Persist the user progress aggregate as one JSON record.

The whole aggregate is written under a single key of a key-value backend:
- SQLiteBackend: ~/.platolearn/progress.db (default)
- MemoryBackend: process-local dict, for tests and throwaway sessions

Read and write failures never escape the store. A corrupt or unreadable
record loads as "no prior state"; a rejected write is logged and reported
through the return value of save().
"""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from platolearn.config import DEFAULT_PROGRESS_DB, STORAGE_KEY
from platolearn.errors import MalformedPersistedState, PersistenceWriteFailure
from platolearn.schemas import UserProgress

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBackend:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SQLiteBackend:
    """
    Key-value table in a local SQLite database.

    Each call opens its own connection, so the database file can be
    inspected or replaced between calls. If the database cannot be created
    at construction, creation is retried on every read and write.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize the backend.

        Args:
            db_path: Path to progress.db (default: ~/.platolearn/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ready = False
        try:
            self._ensure_database()
        except (OSError, sqlite3.Error) as e:
            logger.warning(f"Progress database unavailable at {self.db_path}: {e}")

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        if self._ready:
            return
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()
        self._ready = True

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        try:
            self._ensure_database()
            conn = self._get_connection()
            try:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
                return row["value"] if row else None
            finally:
                conn.close()
        except (OSError, sqlite3.Error) as e:
            raise MalformedPersistedState(f"Could not read {key!r} from {self.db_path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self._ensure_database()
            conn = self._get_connection()
            try:
                now = datetime.now().isoformat()
                conn.execute(
                    """INSERT INTO kv_store (key, value, updated_at)
                       VALUES (?, ?, ?)
                       ON CONFLICT(key) DO UPDATE SET
                         value = excluded.value,
                         updated_at = excluded.updated_at""",
                    (key, value, now)
                )
                conn.commit()
            finally:
                conn.close()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceWriteFailure(f"Could not write {key!r} to {self.db_path}: {e}") from e


def parse_progress(raw: str) -> UserProgress:
    """
    Decode a persisted progress record.

    Unknown fields are ignored and missing fields take their defaults.

    Raises:
        MalformedPersistedState: If the text is not JSON or not a valid record
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedPersistedState(f"Progress record is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedPersistedState(
            f"Progress record must be a JSON object, got {type(data).__name__}"
        )

    try:
        return UserProgress.model_validate(data)
    except ValidationError as e:
        raise MalformedPersistedState(f"Progress record failed validation: {e}") from e


class ProgressStore:
    """Sole owner of the persisted progress record."""

    def __init__(self, backend: Optional[KeyValueBackend] = None, key: str = STORAGE_KEY):
        self.backend = backend if backend is not None else SQLiteBackend()
        self.key = key

    def load(self) -> Optional[UserProgress]:
        """Return the persisted progress, or None if absent or unusable."""
        try:
            raw = self.backend.get(self.key)
            if raw is None:
                return None
            return parse_progress(raw)
        except (MalformedPersistedState, OSError) as e:
            logger.warning(f"Failed to load progress, starting fresh: {e}")
            return None

    def save(self, progress: UserProgress) -> bool:
        """Write the whole aggregate. Returns False if the backend refused it."""
        try:
            self.backend.set(self.key, progress.to_json())
        except (PersistenceWriteFailure, OSError) as e:
            logger.warning(f"Failed to save progress: {e}")
            return False
        logger.debug(f"Saved progress under {self.key!r}")
        return True
