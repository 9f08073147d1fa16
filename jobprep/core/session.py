"""Session: the signed-in user and the open store, passed explicitly.

There is no module-level auth state. Whatever needs to know who is signed in
or where analyses live receives a Session.
"""

import logging
from types import TracebackType

from pydantic import BaseModel, ConfigDict

from jobprep.core.config import Settings
from jobprep.core.errors import AuthenticationError
from jobprep.storage.kv import KeyValueStore, open_store
from jobprep.storage.repository import AnalysisRepository

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    is_demo: bool = False


class Session:
    """Context manager that owns one key-value store and the current user.

    Usage::

        with Session.from_settings(settings) as session:
            session.require_user()
            session.analyses.save(analysis)
    """

    def __init__(
        self,
        settings: Settings,
        user: User | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        self._settings = settings
        self._user = user
        self._store = store
        self._owns_store = store is None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Session":
        """Session for the configured user, or a demo user when demo_mode is on."""
        config = settings.session
        if config.username:
            return cls(settings, User(username=config.username))
        if config.demo_mode:
            return cls.demo(settings)
        return cls(settings)

    @classmethod
    def demo(cls, settings: Settings, store: KeyValueStore | None = None) -> "Session":
        return cls(settings, User(username=DEMO_USERNAME, is_demo=True), store)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def store(self) -> KeyValueStore:
        """The open store. Raises if the session was not entered."""
        if self._store is None:
            msg = "Session not entered, use 'with'"
            raise RuntimeError(msg)
        return self._store

    @property
    def analyses(self) -> AnalysisRepository:
        return AnalysisRepository(self.store)

    def sign_in(self, username: str) -> User:
        username = username.strip()
        if not username:
            msg = "username must not be empty"
            raise ValueError(msg)
        self._user = User(username=username)
        logger.info("Signed in as '%s'", username)
        return self._user

    def sign_out(self) -> None:
        if self._user is not None:
            logger.info("Signed out '%s'", self._user.username)
        self._user = None

    def require_user(self) -> User:
        if self._user is None:
            msg = "Sign in required"
            raise AuthenticationError(msg)
        return self._user

    def __enter__(self) -> "Session":
        if self._store is None:
            self._store = open_store(self._settings.storage)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_store and self._store is not None:
            self._store.close()
            self._store = None
