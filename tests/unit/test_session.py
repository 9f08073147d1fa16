"""Tests for the explicit session: user state and store lifetime."""

import pytest

from jobprep.core.config import SessionConfig, Settings, StorageConfig
from jobprep.core.errors import AuthenticationError
from jobprep.core.session import DEMO_USERNAME, Session
from jobprep.storage.kv import MemoryKeyValueStore, SQLiteKeyValueStore


def _settings(**session: object) -> Settings:
    return Settings(
        storage=StorageConfig(backend="memory"),
        session=SessionConfig(**session),  # type: ignore[arg-type]
    )


class TestFromSettings:
    def test_configured_user(self) -> None:
        session = Session.from_settings(_settings(username="ada"))
        assert session.user is not None
        assert session.user.username == "ada"
        assert session.user.is_demo is False

    def test_demo_mode(self) -> None:
        session = Session.from_settings(_settings())
        assert session.user is not None
        assert session.user.username == DEMO_USERNAME
        assert session.user.is_demo is True

    def test_signed_out(self) -> None:
        session = Session.from_settings(_settings(demo_mode=False))
        assert session.is_authenticated is False


class TestAuth:
    def test_require_user_signed_out(self) -> None:
        session = Session(_settings())
        with pytest.raises(AuthenticationError, match="Sign in required"):
            session.require_user()

    def test_sign_in_and_out(self) -> None:
        session = Session(_settings())
        user = session.sign_in("  grace ")
        assert user.username == "grace"
        assert session.require_user() is user
        session.sign_out()
        assert session.is_authenticated is False

    def test_empty_username(self) -> None:
        with pytest.raises(ValueError):
            Session(_settings()).sign_in("   ")


class TestStoreLifetime:
    def test_store_needs_context(self) -> None:
        with pytest.raises(RuntimeError, match="use 'with'"):
            _ = Session(_settings()).store

    def test_opens_configured_backend(self) -> None:
        with Session(_settings()) as session:
            assert isinstance(session.store, MemoryKeyValueStore)

    def test_owned_store_closed_on_exit(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        settings = Settings(storage=StorageConfig(path=str(tmp_path / "kv.db")))
        session = Session(settings)
        with session:
            assert isinstance(session.store, SQLiteKeyValueStore)
        with pytest.raises(RuntimeError):
            _ = session.store

    def test_injected_store_left_open(self) -> None:
        store = MemoryKeyValueStore()
        session = Session.demo(_settings(), store)
        with session:
            store.set("k", "v")
        assert session.store is store
        assert store.get("k") == "v"

    def test_analyses_share_store(self) -> None:
        store = MemoryKeyValueStore()
        with Session.demo(_settings(), store) as session:
            assert session.analyses.list_recent() == []
