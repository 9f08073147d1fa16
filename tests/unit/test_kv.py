"""Tests for the key-value store backends. Both backends must behave the same."""

import sqlite3

import pytest

from jobprep.core.config import StorageConfig
from jobprep.core.errors import StorageError
from jobprep.core.schemas import KVItem
from jobprep.storage.kv import (
    KeyValueStore,
    MemoryKeyValueStore,
    SQLiteKeyValueStore,
    open_store,
)


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):  # type: ignore[no-untyped-def]
    """Each test runs once per backend."""
    if request.param == "memory":
        kv: KeyValueStore = MemoryKeyValueStore()
    else:
        kv = SQLiteKeyValueStore(tmp_path / "kv.db")
    yield kv
    kv.close()


class TestGetSet:
    def test_missing_key(self, store) -> None:  # type: ignore[no-untyped-def]
        assert store.get("nope") is None

    def test_roundtrip(self, store) -> None:  # type: ignore[no-untyped-def]
        assert store.set("a", "1") is True
        assert store.get("a") == "1"

    def test_overwrite(self, store) -> None:  # type: ignore[no-untyped-def]
        store.set("a", "1")
        store.set("a", "2")
        assert store.get("a") == "2"
        assert store.list("*") == ["a"]


class TestDelete:
    def test_existing(self, store) -> None:  # type: ignore[no-untyped-def]
        store.set("a", "1")
        assert store.delete("a") is True
        assert store.get("a") is None

    def test_missing(self, store) -> None:  # type: ignore[no-untyped-def]
        assert store.delete("a") is False


class TestList:
    def test_pattern_sorted(self, store) -> None:  # type: ignore[no-untyped-def]
        store.set("job_analysis:b", "2")
        store.set("job_analysis:a", "1")
        store.set("other:c", "3")
        assert store.list("job_analysis:*") == ["job_analysis:a", "job_analysis:b"]

    def test_with_values(self, store) -> None:  # type: ignore[no-untyped-def]
        store.set("k1", "v1")
        store.set("k2", "v2")
        assert store.list("k*", return_values=True) == [
            KVItem(key="k1", value="v1"),
            KVItem(key="k2", value="v2"),
        ]

    def test_single_char_wildcard(self, store) -> None:  # type: ignore[no-untyped-def]
        store.set("k1", "v")
        store.set("k10", "v")
        assert store.list("k?") == ["k1"]

    def test_case_sensitive(self, store) -> None:  # type: ignore[no-untyped-def]
        store.set("Key", "v")
        assert store.list("key*") == []

    def test_no_match(self, store) -> None:  # type: ignore[no-untyped-def]
        assert store.list("*") == []


class TestFlush:
    def test_removes_everything(self, store) -> None:  # type: ignore[no-untyped-def]
        store.set("a", "1")
        store.set("b", "2")
        assert store.flush() is True
        assert store.list("*") == []


# ---------------------------------------------------------------------------
# SQLite specifics
# ---------------------------------------------------------------------------


class TestSQLiteStore:
    def test_persists_across_connections(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        path = tmp_path / "kv.db"
        with SQLiteKeyValueStore(path) as kv:
            kv.set("a", "1")
        with SQLiteKeyValueStore(path) as kv:
            assert kv.get("a") == "1"

    def test_creates_parent_dirs(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        path = tmp_path / "nested" / "dir" / "kv.db"
        with SQLiteKeyValueStore(path):
            pass
        assert path.exists()

    def test_wal_mode(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        path = tmp_path / "kv.db"
        SQLiteKeyValueStore(path).close()
        conn = sqlite3.connect(str(path))
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        conn.close()
        assert mode == "wal"

    def test_error_wrapped(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        kv = SQLiteKeyValueStore(tmp_path / "kv.db")
        kv.close()
        with pytest.raises(StorageError, match="Failed to read key"):
            kv.get("a")

    def test_unopenable_path(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(StorageError, match="Failed to open"):
            SQLiteKeyValueStore(blocker / "kv.db")


class TestOpenStore:
    def test_memory(self) -> None:
        assert isinstance(open_store(StorageConfig(backend="memory")), MemoryKeyValueStore)

    def test_sqlite(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        kv = open_store(StorageConfig(backend="sqlite", path=str(tmp_path / "kv.db")))
        assert isinstance(kv, SQLiteKeyValueStore)
        kv.close()
