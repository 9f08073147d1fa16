"""Key-value store: opaque string values under string keys.

Two backends share the KeyValueStore interface:
  - SQLiteKeyValueStore: persistent, one table, GLOB patterns
  - MemoryKeyValueStore: dict-backed, for tests and throwaway runs

Callers serialize values themselves. Patterns use ``*`` / ``?`` globbing.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from fnmatch import fnmatchcase
from pathlib import Path
from types import TracebackType

from jobprep.core.config import StorageConfig
from jobprep.core.errors import StorageError
from jobprep.core.schemas import KVItem

logger = logging.getLogger(__name__)

_KV_TABLE = """
CREATE TABLE IF NOT EXISTS kv (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);
"""


class KeyValueStore(ABC):
    """Interface every store backend implements."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """Store value under key, replacing any previous value. Returns True on success."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Returns True if it existed."""

    @abstractmethod
    def list(self, pattern: str, return_values: bool = False) -> list[str] | list[KVItem]:
        """Keys matching the glob pattern (sorted), or KVItems when return_values is set."""

    @abstractmethod
    def flush(self) -> bool:
        """Remove every key."""

    def close(self) -> None:
        """Release resources. Default is a no-op."""

    def __enter__(self) -> "KeyValueStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class SQLiteKeyValueStore(KeyValueStore):
    """Persistent store in a single SQLite table.

    Every sqlite3.Error is re-raised as StorageError.
    """

    def __init__(self, path: str | Path) -> None:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(path))
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(_KV_TABLE)
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            msg = f"Failed to open key-value store at {path}: {e}"
            raise StorageError(msg) from e
        self._conn = conn
        self._path = path
        logger.debug("Opened key-value store at %s", path)

    def get(self, key: str) -> str | None:
        try:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            msg = f"Failed to read key '{key}': {e}"
            raise StorageError(msg) from e
        return None if row is None else row["value"]

    def set(self, key: str, value: str) -> bool:
        try:
            self._conn.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.now(timezone.utc).isoformat()),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            msg = f"Failed to write key '{key}': {e}"
            raise StorageError(msg) from e
        return True

    def delete(self, key: str) -> bool:
        try:
            cursor = self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            self._conn.commit()
        except sqlite3.Error as e:
            msg = f"Failed to delete key '{key}': {e}"
            raise StorageError(msg) from e
        return cursor.rowcount > 0

    def list(self, pattern: str, return_values: bool = False) -> list[str] | list[KVItem]:
        try:
            rows = self._conn.execute(
                "SELECT key, value FROM kv WHERE key GLOB ? ORDER BY key",
                (pattern,),
            ).fetchall()
        except sqlite3.Error as e:
            msg = f"Failed to list keys matching '{pattern}': {e}"
            raise StorageError(msg) from e
        if return_values:
            return [KVItem(key=row["key"], value=row["value"]) for row in rows]
        return [row["key"] for row in rows]

    def flush(self) -> bool:
        try:
            cursor = self._conn.execute("DELETE FROM kv")
            self._conn.commit()
        except sqlite3.Error as e:
            msg = f"Failed to flush key-value store: {e}"
            raise StorageError(msg) from e
        logger.info("Flushed %d keys from %s", cursor.rowcount, self._path)
        return True

    def close(self) -> None:
        self._conn.close()


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Contents vanish with the object."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def list(self, pattern: str, return_values: bool = False) -> list[str] | list[KVItem]:
        keys = sorted(k for k in self._data if fnmatchcase(k, pattern))
        if return_values:
            return [KVItem(key=k, value=self._data[k]) for k in keys]
        return keys

    def flush(self) -> bool:
        self._data.clear()
        return True


def open_store(config: StorageConfig) -> KeyValueStore:
    """Create the store backend named in config."""
    if config.backend == "memory":
        return MemoryKeyValueStore()
    return SQLiteKeyValueStore(config.path)
