"""Unit tests for the Medium and Credly providers (httpx.MockTransport)."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from portfolio_cms.domain.exceptions import ProviderError, ProviderErrorKind
from portfolio_cms.infrastructure.providers import (
    CredlyBadgeProvider,
    MediumFeedProvider,
    extract_username,
)


# ── Helpers ──


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _medium_item(**overrides) -> dict:
    item = {
        "title": "Breaking a CTF",
        "pubDate": "2024-01-05 10:00:00",
        "link": "https://medium.com/@jane/ctf",
        "content": '<p><img src="https://cdn/img.png">' + "word " * 100 + "</p>",
        "categories": ["security", "ctf", "linux", "python", "extra"],
    }
    item.update(overrides)
    return item


def _badge(state: str = "accepted", expires_at: str | None = None, **overrides) -> dict:
    badge = {
        "id": "abc",
        "state": state,
        "issued_at": "2024-03-02T00:00:00Z",
        "expires_at": expires_at,
        "badge_template": {
            "name": "Security+",
            "description": "CompTIA Security+",
            "image_url": "https://images/sec.png",
            "issuer": {"name": "CompTIA"},
            "skills": [{"name": "Risk"}, {"name": "Crypto"}],
        },
    }
    badge.update(overrides)
    return badge


# ── Medium ──


@pytest.mark.asyncio
async def test_medium_posts_are_mapped():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["rss_url"] == "https://medium.com/feed/@jane"
        return httpx.Response(200, json={"status": "ok", "items": [_medium_item()]})

    async with _client(handler) as http:
        posts = await MediumFeedProvider(http_client=http).fetch_posts("jane")

    post = posts[0]
    assert post.title == "Breaking a CTF"
    assert post.date == "January 5, 2024"
    assert post.excerpt.endswith("...")
    assert len(post.excerpt) == 153
    assert post.category == "security"
    assert post.tags == ["security", "ctf", "linux", "python"]
    assert post.image == "https://cdn/img.png"


@pytest.mark.asyncio
async def test_medium_dangerous_link_is_dropped():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"status": "ok", "items": [_medium_item(link="javascript:alert(1)")]}
        )

    async with _client(handler) as http:
        posts = await MediumFeedProvider(http_client=http).fetch_posts("jane")
    assert posts[0].link == ""


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response, kind",
    [
        (httpx.Response(404), ProviderErrorKind.NOT_FOUND),
        (httpx.Response(503), ProviderErrorKind.UNAVAILABLE),
        (httpx.Response(200, text="<html>"), ProviderErrorKind.INVALID_RESPONSE),
        (httpx.Response(200, json={"status": "error", "message": "bad feed"}), ProviderErrorKind.NOT_FOUND),
    ],
)
async def test_medium_error_kinds(response, kind):
    async with _client(lambda request: response) as http:
        with pytest.raises(ProviderError) as exc_info:
            await MediumFeedProvider(http_client=http).fetch_posts("jane")
    assert exc_info.value.kind is kind


@pytest.mark.asyncio
async def test_medium_network_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    async with _client(handler) as http:
        with pytest.raises(ProviderError) as exc_info:
            await MediumFeedProvider(http_client=http).fetch_posts("jane")
    assert exc_info.value.kind is ProviderErrorKind.UNAVAILABLE


# ── Credly ──


@pytest.mark.asyncio
async def test_credly_falls_through_to_next_proxy():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.host)
        if request.url.host == "proxy-one.test":
            return httpx.Response(500)
        return httpx.Response(200, json={"data": [_badge()]})

    provider = CredlyBadgeProvider(
        proxies=["https://proxy-one.test/?url={url}", "https://proxy-two.test/raw?url={url}"],
        http_client=_client(handler),
    )
    badges = await provider.fetch_badges("jane")

    assert seen == ["proxy-one.test", "proxy-two.test"]
    badge = badges[0]
    assert badge.title == "Security+"
    assert badge.issuer == "CompTIA"
    assert badge.date == "Mar 2, 2024"
    assert badge.skills == ["Risk", "Crypto"]
    assert badge.credential_url == "https://www.credly.com/badges/abc"


@pytest.mark.asyncio
async def test_credly_direct_url_without_proxies():
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://www.credly.com/users/jane/badges.json"
        return httpx.Response(200, json={"data": []})

    async with _client(handler) as http:
        assert await CredlyBadgeProvider(http_client=http).fetch_badges("jane") == []


@pytest.mark.asyncio
async def test_credly_filters_expired_and_unaccepted():
    past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    future = (datetime.now(timezone.utc) + timedelta(days=30)).isoformat()
    payload = {
        "data": [
            _badge(id="1"),
            _badge(id="2", expires_at=past),
            _badge(id="3", state="pending"),
            _badge(id="4", expires_at=future),
        ]
    }
    async with _client(lambda request: httpx.Response(200, json=payload)) as http:
        badges = await CredlyBadgeProvider(http_client=http).fetch_badges("jane")
    assert [b.id for b in badges] == ["1", "4"]


@pytest.mark.asyncio
async def test_credly_all_sources_failing_raises_last_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("blocked", request=request)

    provider = CredlyBadgeProvider(
        proxies=["https://a.test/?u={url}", "https://b.test/?u={url}"],
        http_client=_client(handler),
    )
    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_badges("jane")
    assert exc_info.value.kind is ProviderErrorKind.BLOCKED


@pytest.mark.asyncio
async def test_credly_payload_without_data_is_invalid():
    async with _client(lambda request: httpx.Response(200, json={"items": []})) as http:
        with pytest.raises(ProviderError) as exc_info:
            await CredlyBadgeProvider(http_client=http).fetch_badges("jane")
    assert exc_info.value.kind is ProviderErrorKind.INVALID_RESPONSE


def test_extract_username():
    assert extract_username("https://www.credly.com/users/jane.a1b2/badges") == "jane.a1b2"
    assert extract_username("jane.a1b2") == "jane.a1b2"
