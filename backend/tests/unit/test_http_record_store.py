"""Unit tests for HttpRecordStore (httpx.MockTransport)."""

import json

import httpx
import pytest

from portfolio_cms.domain.exceptions import RecordStoreError
from portfolio_cms.infrastructure.http.http_record_store import HttpRecordStore


def _store(handler, api_key: str = "key-123") -> HttpRecordStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpRecordStore("https://cms.test/api/v1/", api_key=api_key, http_client=client)


@pytest.mark.asyncio
async def test_get_all_hits_collection_url():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/v1/records/skills"
        return httpx.Response(200, json=[{"id": 1, "name": "Python"}])

    assert await _store(handler).get_all("skills") == [{"id": 1, "name": "Python"}]


@pytest.mark.asyncio
async def test_writes_send_bearer_key_and_json_body():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": 7, **captured["body"]})

    row = await _store(handler).create("projects", {"title": "Scanner"})

    assert captured["auth"] == "Bearer key-123"
    assert captured["body"] == {"title": "Scanner"}
    assert row["id"] == 7


@pytest.mark.asyncio
async def test_update_uses_patch():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PATCH"
        assert request.url.path == "/api/v1/records/skills/3"
        return httpx.Response(200, json={"id": 3, "name": "Go"})

    assert (await _store(handler).update("skills", 3, {"name": "Go"}))["name"] == "Go"


@pytest.mark.asyncio
async def test_not_found_maps_to_none_and_false():
    store = _store(lambda request: httpx.Response(404, json={"detail": "missing"}))
    assert await store.get_by_id("skills", 1) is None
    assert await store.update("skills", 1, {"name": "x"}) is None
    assert await store.delete("skills", 1) is False


@pytest.mark.asyncio
async def test_server_error_raises_record_store_error():
    store = _store(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(RecordStoreError):
        await store.get_all("skills")


@pytest.mark.asyncio
async def test_network_error_raises_record_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("slow", request=request)

    with pytest.raises(RecordStoreError):
        await _store(handler).delete("skills", 1)


@pytest.mark.asyncio
async def test_non_list_collection_body_is_rejected():
    store = _store(lambda request: httpx.Response(200, json={"id": 1}))
    with pytest.raises(RecordStoreError):
        await store.get_all("skills")


@pytest.mark.asyncio
async def test_no_auth_header_without_key():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json=[])

    assert await _store(handler, api_key="").get_all("skills") == []
