"""Credly badge provider — fetches a user's public badges, trying proxies in turn."""

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote, urlparse

import httpx

from portfolio_cms.application.interfaces import BadgeProvider
from portfolio_cms.domain.entities import Badge
from portfolio_cms.domain.exceptions import ProviderError, ProviderErrorKind
from portfolio_cms.domain.input_sanitizer import sanitize_url

logger = logging.getLogger(__name__)


def extract_username(profile_url: str) -> str:
    """'https://www.credly.com/users/jane.a1b2' → 'jane.a1b2'.

    Anything that is not a profile URL is returned unchanged.
    """
    parts = urlparse(profile_url).path.split("/")
    if "users" in parts:
        index = parts.index("users")
        if index + 1 < len(parts) and parts[index + 1]:
            return parts[index + 1]
    return profile_url


def _parse_datetime(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _short_date(raw: str | None) -> str:
    parsed = _parse_datetime(raw)
    return f"{parsed:%b} {parsed.day}, {parsed.year}" if parsed else (raw or "")


def _to_badge(item: dict[str, Any]) -> Badge:
    template = item.get("badge_template") or {}
    issuer = template.get("issuer") or item.get("issuer") or {}
    credential_url = (
        item.get("public_url")
        or item.get("url")
        or f"https://www.credly.com/badges/{item.get('id')}"
    )
    return Badge(
        id=str(item.get("id", "")),
        title=template.get("name") or item.get("name") or "Badge",
        issuer=issuer.get("name") or "Credly",
        date=_short_date(item.get("issued_at")),
        description=template.get("description") or item.get("description") or "",
        image=template.get("image_url") or item.get("image_url") or "",
        credential_url=sanitize_url(credential_url) or "",
        skills=[s.get("name", "") for s in template.get("skills") or [] if isinstance(s, dict)],
        expires_at=_parse_datetime(item.get("expires_at")),
        state=item.get("state") or "",
    )


class CredlyBadgeProvider(BadgeProvider):
    """Infrastructure adapter — Credly badges.

    ``proxies`` are URL templates containing ``{url}``; they are tried in
    order and the first success wins. With no proxies Credly is called
    directly.
    """

    def __init__(
        self,
        base_url: str = "https://www.credly.com",
        proxies: list[str] | None = None,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._proxies = list(proxies or [])
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "credly"

    def _candidate_urls(self, username: str) -> list[str]:
        target = f"{self._base_url}/users/{username}/badges.json"
        if not self._proxies:
            return [target]
        return [proxy.format(url=quote(target, safe="")) for proxy in self._proxies]

    async def fetch_badges(self, username: str) -> list[Badge]:
        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None
        last_error: ProviderError | None = None

        try:
            for url in self._candidate_urls(username):
                try:
                    response = await client.get(url, headers={"Accept": "application/json"})
                except httpx.HTTPError as exc:
                    logger.info("Credly request via %s failed: %s", url, exc)
                    last_error = ProviderError(self.provider_name, ProviderErrorKind.BLOCKED, str(exc))
                    continue

                if response.status_code == 404:
                    last_error = ProviderError(self.provider_name, ProviderErrorKind.NOT_FOUND, username)
                    continue
                if not response.is_success:
                    logger.info("Credly request via %s returned %d", url, response.status_code)
                    last_error = ProviderError(
                        self.provider_name, ProviderErrorKind.UNAVAILABLE, f"HTTP {response.status_code}"
                    )
                    continue
                try:
                    payload = response.json()
                except ValueError as exc:
                    last_error = ProviderError(
                        self.provider_name, ProviderErrorKind.INVALID_RESPONSE, str(exc)
                    )
                    continue
                return self._transform(payload)
        finally:
            if should_close:
                await client.aclose()

        logger.error("All Credly sources failed for %s", username)
        raise last_error or ProviderError(self.provider_name, ProviderErrorKind.UNAVAILABLE)

    def _transform(self, payload: Any) -> list[Badge]:
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise ProviderError(self.provider_name, ProviderErrorKind.INVALID_RESPONSE, "missing 'data'")
        now = datetime.now(timezone.utc)
        badges = [_to_badge(item) for item in payload["data"] if isinstance(item, dict)]
        return [badge for badge in badges if badge.is_active(now)]
