"""Abstract port for the Local Persistence Store."""

from abc import ABC, abstractmethod


class LocalStore(ABC):
    """Synchronous, durable string key-value storage.

    Missing keys are not an error: absence means "never migrated" or
    "never edited". Writes are last-writer-wins.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored string for ``key`` or ``None``."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; a no-op when it is absent."""
        ...
