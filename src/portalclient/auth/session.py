"""Shared session state."""

from __future__ import annotations

import logging
import threading

import msgspec

from portalclient.config.credentials import SessionStore
from portalclient.models import UserIdentity

logger = logging.getLogger(__name__)


class SessionState(msgspec.Struct, frozen=True):
    """Point-in-time copy of the session."""

    token: str | None = None
    user: UserIdentity | None = None

    @property
    def authenticated(self) -> bool:
        return self.token is not None


class Session:
    """Lock-guarded holder of the current token and cached user.

    The session is read on every request and written only on login, logout
    and auth invalidation. ``clear()`` is idempotent: after the first clear,
    further clears report False until the next ``set()``.
    """

    def __init__(
        self,
        token: str | None = None,
        user: UserIdentity | None = None,
        store: SessionStore | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._token = token
        self._user = user
        self._store = store
        self._cleared = False

    @classmethod
    def load(cls, store: SessionStore) -> Session:
        """Restore the persisted session."""
        stored = store.load()
        return cls(token=stored.token, user=stored.user, store=store)

    @property
    def token(self) -> str | None:
        with self._lock:
            return self._token

    @property
    def user(self) -> UserIdentity | None:
        with self._lock:
            return self._user

    def snapshot(self) -> SessionState:
        with self._lock:
            return SessionState(token=self._token, user=self._user)

    def set(self, token: str, user: UserIdentity | None = None) -> None:
        """Store a new token and user, persisting them if a store is attached."""
        with self._lock:
            self._token = token
            self._user = user
            self._cleared = False
            if self._store is not None:
                self._store.save(token, user)

    def clear(self) -> bool:
        """Drop token and user from memory and storage.

        Returns:
            True if this call cleared the session, False if it was already cleared
        """
        with self._lock:
            if self._cleared:
                return False
            self._token = None
            self._user = None
            self._cleared = True
            if self._store is not None:
                try:
                    self._store.clear()
                except OSError:
                    # The in-memory session is already gone
                    logger.warning("Could not remove the stored session", exc_info=True)
            return True
