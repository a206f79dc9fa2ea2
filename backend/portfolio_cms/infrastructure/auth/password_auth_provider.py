"""Single-owner password authentication — implements the AuthProvider port."""

import hmac
import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from portfolio_cms.application.interfaces import AuthProvider, AuthSession, SessionListener
from portfolio_cms.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasswordAuthProvider(AuthProvider):
    """Checks the owner's email/password and keeps one active session.

    Sessions expire after ``ttl_seconds``. Expiry is noticed lazily, the next
    time the session is read, and listeners are told the session is gone.
    With no password configured every sign-in is refused.
    """

    def __init__(
        self,
        email: str,
        password: str,
        ttl_seconds: int = 8 * 3600,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._email = email.strip().lower()
        self._password = password
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._session: AuthSession | None = None
        self._listeners: list[SessionListener] = []

    def _notify(self, session: AuthSession | None) -> None:
        for listener in list(self._listeners):
            listener(session)

    def get_session(self) -> AuthSession | None:
        session = self._session
        if session is not None and self._clock() >= session.expires_at:
            logger.info("Owner session expired")
            self._session = None
            self._notify(None)
            return None
        return session

    def verify(self, token: str | None) -> AuthSession | None:
        """Return the active session when ``token`` belongs to it."""
        session = self.get_session()
        if session is None or not token:
            return None
        if not hmac.compare_digest(session.token, token):
            return None
        return session

    async def sign_in(self, email: str, password: str) -> AuthSession:
        if not self._password:
            logger.warning("Sign-in refused: no admin password configured")
            raise AuthenticationError("Sign-in is disabled on this server")

        email_ok = hmac.compare_digest(email.strip().lower().encode(), self._email.encode())
        password_ok = hmac.compare_digest(password.encode(), self._password.encode())
        if not (email_ok and password_ok):
            logger.warning("Failed sign-in attempt for %s", email)
            raise AuthenticationError("Invalid email or password")

        self._session = AuthSession(
            token=secrets.token_urlsafe(32),
            email=self._email,
            expires_at=self._clock() + self._ttl,
        )
        logger.info("Owner signed in")
        self._notify(self._session)
        return self._session

    async def sign_out(self) -> None:
        if self._session is None:
            return
        self._session = None
        logger.info("Owner signed out")
        self._notify(None)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
