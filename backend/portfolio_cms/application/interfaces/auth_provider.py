"""Abstract port for the authentication collaborator."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime


@dataclass
class AuthSession:
    """An authenticated owner session."""

    token: str
    email: str
    expires_at: datetime


# Called with the new session (or None after sign-out / expiry)
SessionListener = Callable[[AuthSession | None], None]


class AuthProvider(ABC):
    """Opaque credential-check service.

    Any non-None session counts as "authenticated".
    """

    @abstractmethod
    def get_session(self) -> AuthSession | None:
        """Return the current valid session, or None."""
        ...

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Check credentials and open a session. Raises AuthenticationError."""
        ...

    @abstractmethod
    async def sign_out(self) -> None:
        """Close the current session, if any."""
        ...

    @abstractmethod
    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a session-change listener; returns an unsubscribe callable."""
        ...
