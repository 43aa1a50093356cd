"""Process-wide holder for the active `AuthSession`."""

import asyncio
import logging
import threading

from vimeo_client.types.auth_session import AuthSession

logger = logging.getLogger(__name__)


class AuthSessionHandle:
    """Swappable reference to the current session.

    Sessions are immutable, so a reader always sees either the old or the new
    session in full. `exchange_lock` serializes concurrent re-authentication.
    """

    def __init__(self, session: AuthSession | None = None):
        self._session = session
        self._swap_lock = threading.Lock()
        self.exchange_lock = asyncio.Lock()

    @property
    def current(self) -> AuthSession | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def swap(self, session: AuthSession) -> AuthSession | None:
        """Install `session` and return the one it replaced."""
        with self._swap_lock:
            previous, self._session = self._session, session
        logger.debug(f"Session swapped in: {session!r}")
        return previous

    def clear(self) -> AuthSession | None:
        with self._swap_lock:
            previous, self._session = self._session, None
        if previous is not None:
            logger.debug("Session cleared")
        return previous
