"""Domain entities for read-only third-party feeds (blog posts, badges)."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


@dataclass
class BlogPost:
    """A post pulled from the blog feed provider."""

    title: str
    excerpt: str
    content: str
    date: str
    link: str
    category: str = "Article"
    tags: list[str] = field(default_factory=list)
    image: str | None = None


@dataclass
class Badge:
    """A credential badge pulled from the badge provider."""

    id: str
    title: str
    issuer: str
    date: str
    description: str = ""
    image: str = ""
    credential_url: str = ""
    skills: list[str] = field(default_factory=list)
    expires_at: datetime | None = None
    state: str = ""

    def is_active(self, now: datetime) -> bool:
        """Only accepted, non-expired badges are shown."""
        if self.state != "accepted":
            return False
        return self.expires_at is None or self.expires_at > now


class FeedStatus(str, Enum):
    """Lifecycle of a third-party feed on a page."""

    LOADING = "loading"
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class FeedState:
    """Outcome of loading one feed — distinguishes empty from failed."""

    status: FeedStatus = FeedStatus.LOADING
    items: list = field(default_factory=list)
    error: str | None = None
