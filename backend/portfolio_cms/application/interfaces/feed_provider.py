"""Abstract ports for read-only third-party data providers."""

from abc import ABC, abstractmethod

from portfolio_cms.domain.entities import Badge, BlogPost


class BlogFeedProvider(ABC):
    """Source of blog posts for a username-like identifier."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @abstractmethod
    async def fetch_posts(self, username: str) -> list[BlogPost]:
        """Return posts newest first. Raises ProviderError on failure."""
        ...


class BadgeProvider(ABC):
    """Source of credential badges for a username-like identifier."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @abstractmethod
    async def fetch_badges(self, username: str) -> list[Badge]:
        """Return accepted, non-expired badges. Raises ProviderError on failure."""
        ...
