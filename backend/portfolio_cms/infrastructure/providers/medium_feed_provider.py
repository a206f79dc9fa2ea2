"""Medium blog feed provider — reads a user's RSS feed through rss2json."""

import logging
import re
from datetime import datetime
from typing import Any

import httpx

from portfolio_cms.application.interfaces import BlogFeedProvider
from portfolio_cms.domain.entities import BlogPost
from portfolio_cms.domain.exceptions import ProviderError, ProviderErrorKind
from portfolio_cms.domain.input_sanitizer import sanitize_url

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")
_IMG_RE = re.compile(r'<img[^>]+src="([^"]+)"')
_DATE_FORMATS = ("%Y-%m-%d %H:%M:%S", "%a, %d %b %Y %H:%M:%S %Z", "%Y-%m-%d")

EXCERPT_LENGTH = 150
CONTENT_LENGTH = 300
MAX_TAGS = 4


def _long_date(raw: str) -> str:
    """'2024-01-05 10:00:00' → 'January 5, 2024'; unknown formats pass through."""
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(raw, fmt)
        except ValueError:
            continue
        return f"{parsed:%B} {parsed.day}, {parsed.year}"
    return raw


def _to_post(item: dict[str, Any]) -> BlogPost:
    content = item.get("content") or ""
    text = _TAG_RE.sub("", content)
    image = _IMG_RE.search(content)
    excerpt = f"{text[:EXCERPT_LENGTH]}..." if content else item.get("description") or ""
    tags = [str(t) for t in item.get("categories") or []]
    link = sanitize_url(item.get("link")) or ""
    return BlogPost(
        title=item.get("title") or "",
        excerpt=excerpt,
        content=f"{text[:CONTENT_LENGTH]}..." if content else excerpt,
        date=_long_date(item.get("pubDate") or ""),
        link=link,
        category=tags[0] if tags else "Article",
        tags=tags[:MAX_TAGS],
        image=image.group(1) if image else None,
    )


class MediumFeedProvider(BlogFeedProvider):
    """Infrastructure adapter — Medium posts via the rss2json conversion API."""

    def __init__(
        self,
        api_url: str = "https://api.rss2json.com/v1/api.json",
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_url = api_url
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "medium"

    async def fetch_posts(self, username: str) -> list[BlogPost]:
        rss_url = f"https://medium.com/feed/@{username}"
        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None
        logger.info("Fetching Medium posts for %s", username)

        try:
            response = await client.get(self._api_url, params={"rss_url": rss_url})
        except httpx.HTTPError as exc:
            raise ProviderError(self.provider_name, ProviderErrorKind.UNAVAILABLE, str(exc)) from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code == 404:
            raise ProviderError(self.provider_name, ProviderErrorKind.NOT_FOUND, rss_url)
        if not response.is_success:
            raise ProviderError(
                self.provider_name, ProviderErrorKind.UNAVAILABLE, f"HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(self.provider_name, ProviderErrorKind.INVALID_RESPONSE, str(exc)) from exc

        if not isinstance(data, dict):
            raise ProviderError(self.provider_name, ProviderErrorKind.INVALID_RESPONSE, "expected an object")
        if data.get("status") != "ok":
            raise ProviderError(
                self.provider_name,
                ProviderErrorKind.NOT_FOUND,
                data.get("message") or "Invalid RSS feed",
            )

        items = data.get("items") or []
        if not items:
            logger.warning("No blog posts found for %s", username)
        return [_to_post(item) for item in items]
