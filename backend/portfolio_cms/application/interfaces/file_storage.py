"""Abstract port for binary asset storage keyed by public URL."""

from abc import ABC, abstractmethod


class FileStorage(ABC):
    """Port for uploaded images — implemented in the infrastructure layer."""

    @abstractmethod
    async def upload(self, content: bytes, filename: str, folder: str) -> str:
        """Store ``content`` under ``folder`` and return its public URL."""
        ...

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """Delete the asset behind ``url``. Returns False if it is not ours or missing."""
        ...
