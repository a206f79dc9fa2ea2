"""HTTP record store — implements the RecordStore port against a remote
deployment of this service's ``/records`` API."""

import logging
from typing import Any

import httpx

from portfolio_cms.application.interfaces import RecordStore
from portfolio_cms.domain.exceptions import RecordStoreError

logger = logging.getLogger(__name__)


class HttpRecordStore(RecordStore):
    """Infrastructure adapter — talks to a hosted backend over httpx.

    Writes authenticate with the configured API key as a bearer token.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._http_client = http_client

    def _get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _url(self, collection: str, record_id: int | None = None) -> str:
        url = f"{self._base_url}/records/{collection}"
        return url if record_id is None else f"{url}/{record_id}"

    async def _request(
        self,
        operation: str,
        collection: str,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request; 404 is returned to the caller, other errors raise."""
        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None
        try:
            response = await client.request(method, url, headers=self._get_headers(), json=json)
        except httpx.HTTPError as exc:
            raise RecordStoreError(operation, collection, f"{type(exc).__name__}: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code == 404 or response.is_success:
            return response
        detail = response.text[:200]
        logger.error("Record store %s %s → %d: %s", method, url, response.status_code, detail)
        raise RecordStoreError(operation, collection, f"HTTP {response.status_code}: {detail}")

    # ── RecordStore ─────────────────────────────────────────────────

    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        response = await self._request("get_all", collection, "GET", self._url(collection))
        if response.status_code == 404:
            raise RecordStoreError("get_all", collection, "unknown collection")
        data = response.json()
        if not isinstance(data, list):
            raise RecordStoreError("get_all", collection, "expected a JSON list")
        return data

    async def get_by_id(self, collection: str, record_id: int) -> dict[str, Any] | None:
        response = await self._request(
            "get_by_id", collection, "GET", self._url(collection, record_id)
        )
        return None if response.status_code == 404 else response.json()

    async def create(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "create", collection, "POST", self._url(collection), json=fields
        )
        if response.status_code == 404:
            raise RecordStoreError("create", collection, "unknown collection")
        return response.json()

    async def update(
        self, collection: str, record_id: int, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        response = await self._request(
            "update", collection, "PATCH", self._url(collection, record_id), json=fields
        )
        return None if response.status_code == 404 else response.json()

    async def delete(self, collection: str, record_id: int) -> bool:
        response = await self._request(
            "delete", collection, "DELETE", self._url(collection, record_id)
        )
        return response.status_code != 404
