"""Abstract repository interface (port) for the remote record store."""

from abc import ABC, abstractmethod
from typing import Any


class RecordStore(ABC):
    """Port for the hosted backend's record collections.

    Records are plain field maps; the store assigns an integer ``id`` on
    creation. Implementations raise ``RecordStoreError`` on backend failure.
    """

    @abstractmethod
    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        """Return every record of ``collection`` in display order."""
        ...

    @abstractmethod
    async def get_by_id(self, collection: str, record_id: int) -> dict[str, Any] | None:
        """Retrieve a single record, or ``None`` when it does not exist."""
        ...

    @abstractmethod
    async def create(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Persist a new record and return it with its assigned ``id``."""
        ...

    @abstractmethod
    async def update(
        self, collection: str, record_id: int, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Merge ``fields`` into an existing record. Returns ``None`` if not found."""
        ...

    @abstractmethod
    async def delete(self, collection: str, record_id: int) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...
