"""Edit-Mode Session — the persisted edit flag gated by authentication."""

import logging

from portfolio_cms.application.interfaces import AuthProvider, AuthSession, LocalStore
from portfolio_cms.domain.exceptions import AuthenticationError, EditModeDisabledError

logger = logging.getLogger(__name__)

EDIT_MODE_KEY = "editMode"


class EditModeSession:
    """Process-wide edit toggle.

    The flag survives restarts through the Local Persistence Store, but on its
    own it never unlocks editing: ``can_edit`` also requires a live session.
    Whenever the session goes away (sign-out or expiry) or a different
    session begins, the flag is forced off, so signing back in requires an
    explicit toggle. A flag left on by a previous process is reset at start.
    """

    def __init__(self, local_store: LocalStore, auth: AuthProvider) -> None:
        self._local = local_store
        self._auth = auth
        self._enabled = local_store.get(EDIT_MODE_KEY) == "true"
        current = auth.get_session()
        self._token = current.token if current else None
        if current is None and self._enabled:
            self._set(False)
            logger.info("No active session; stale edit mode switched off")
        self._unsubscribe = auth.subscribe(self._on_session_change)

    @property
    def flag(self) -> bool:
        """The persisted flag value, regardless of authentication."""
        return self._enabled

    @property
    def is_authenticated(self) -> bool:
        return self._auth.get_session() is not None

    def can_edit(self) -> bool:
        return self._enabled and self.is_authenticated

    def require_edit(self) -> None:
        """Raise EditModeDisabledError unless editing is unlocked."""
        if not self.can_edit():
            raise EditModeDisabledError()

    def toggle(self) -> bool:
        """Flip the flag and persist it. Only an authenticated owner may toggle."""
        if not self.is_authenticated:
            raise AuthenticationError("Sign in to change edit mode")
        self._set(not self._enabled)
        logger.info("Edit mode %s", "enabled" if self._enabled else "disabled")
        return self._enabled

    def close(self) -> None:
        self._unsubscribe()

    def _set(self, enabled: bool) -> None:
        self._enabled = enabled
        self._local.set(EDIT_MODE_KEY, "true" if enabled else "false")

    def _on_session_change(self, session: AuthSession | None) -> None:
        token = session.token if session else None
        if token == self._token:
            return
        self._token = token
        if self._enabled:
            self._set(False)
            logger.info("Session changed; edit mode switched off")
