"""Remote Record Store Client — guarded, typed access to the hosted backend.

Every call goes through the shared RateLimiter, project writes are validated
and sanitised, and each backend call is bounded by a timeout. Backend
failures never propagate: reads degrade to an empty result, writes return
``None``/``False`` so the calling action can tell the user.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, TypeVar

from portfolio_cms.application.interfaces import FileStorage, RecordStore
from portfolio_cms.application.schemas.project import (
    validate_project_create,
    validate_project_update,
)
from portfolio_cms.application.services.rate_limiter import RateLimiter
from portfolio_cms.domain.entities import (
    HOME_DATA,
    Collection,
    EntityRecord,
    HomeData,
    get_spec,
)
from portfolio_cms.domain.input_sanitizer import screen_link_fields
from portfolio_cms.domain.exceptions import InputValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RateLimits:
    """Attempts allowed per window for each operation kind."""

    create: int = 5
    update: int = 10
    delete: int = 5
    read: int = 30
    window_seconds: float = 60.0


def _validate_id(record_id: Any) -> int:
    if isinstance(record_id, bool) or not isinstance(record_id, int) or record_id <= 0:
        raise InputValidationError("id", "Invalid record ID")
    return record_id


class RemoteRecordClient:
    """Orchestrates record store access for every entity collection."""

    def __init__(
        self,
        store: RecordStore,
        rate_limiter: RateLimiter,
        *,
        file_storage: FileStorage | None = None,
        limits: RateLimits | None = None,
        timeout_seconds: float = 10.0,
    ):
        self._store = store
        self._files = file_storage
        self._limiter = rate_limiter
        self._limits = limits or RateLimits()
        self._timeout = timeout_seconds

    # ── Helpers ──────────────────────────────────────────────────────

    async def _call(self, awaitable: Awaitable[T]) -> T:
        return await asyncio.wait_for(awaitable, timeout=self._timeout)

    def _limit(self, key: str, max_attempts: int) -> None:
        self._limiter.check(key, max_attempts, self._limits.window_seconds)

    @staticmethod
    def _to_entity(collection: Collection, row: dict[str, Any]) -> EntityRecord:
        return get_spec(collection).entity_type.from_fields(row)

    # ── Collections ─────────────────────────────────────────────────

    async def fetch_all(
        self, collection: Collection, *, rate_limited: bool = True
    ) -> list[EntityRecord]:
        """Return the collection in display order; empty on any backend failure.

        Raises RateLimitExceededError before reaching the store when the read
        budget is spent, unless ``rate_limited`` is False (public page views).
        """
        collection = Collection(collection)
        if rate_limited:
            self._limit(f"fetch:{collection.value}", self._limits.read)
        try:
            rows = await self._call(self._store.get_all(collection.value))
        except Exception as exc:
            logger.error("Error fetching %s: %s", collection.value, exc)
            return []
        return [self._to_entity(collection, row) for row in rows]

    async def fetch_one(self, collection: Collection, record_id: int) -> EntityRecord | None:
        """Return one record by identifier, or None when missing or unreachable."""
        collection = Collection(collection)
        record_id = _validate_id(record_id)
        self._limit(f"fetch:{collection.value}", self._limits.read)
        try:
            row = await self._call(self._store.get_by_id(collection.value, record_id))
        except Exception as exc:
            logger.error("Error fetching %s/%s: %s", collection.value, record_id, exc)
            return None
        return self._to_entity(collection, row) if row else None

    async def create(
        self,
        collection: Collection,
        record: EntityRecord | dict[str, Any],
        *,
        rate_limited: bool = True,
    ) -> EntityRecord | None:
        """Create a record and return it with its backend identifier, or None."""
        collection = Collection(collection)
        known = set(get_spec(collection).entity_type.field_names())
        raw = record.to_fields() if isinstance(record, EntityRecord) else record
        fields = {k: v for k, v in raw.items() if k in known}

        if rate_limited:
            self._limit(f"create:{collection.value}", self._limits.create)
        if collection is Collection.PROJECTS:
            fields = validate_project_create(fields)
        screen_link_fields(fields)

        try:
            row = await self._call(self._store.create(collection.value, fields))
        except Exception as exc:
            logger.error("Error creating %s record: %s", collection.value, exc)
            return None
        return self._to_entity(collection, row)

    async def update(
        self, collection: Collection, record_id: int | None, fields: dict[str, Any]
    ) -> EntityRecord | None:
        """Partially update a record by identifier; None on failure or missing id."""
        collection = Collection(collection)
        if record_id is None:
            logger.warning("Skipping %s update: record has no identifier", collection.value)
            return None
        record_id = _validate_id(record_id)

        self._limit(f"update:{collection.value}:{record_id}", self._limits.update)
        known = set(get_spec(collection).entity_type.field_names())
        fields = {k: v for k, v in fields.items() if k in known}
        if collection is Collection.PROJECTS:
            fields = validate_project_update(fields)
        screen_link_fields(fields)

        try:
            row = await self._call(self._store.update(collection.value, record_id, fields))
        except Exception as exc:
            logger.error("Error updating %s/%s: %s", collection.value, record_id, exc)
            return None
        if row is None:
            logger.error("Error updating %s/%s: record not found", collection.value, record_id)
            return None
        return self._to_entity(collection, row)

    async def delete(self, collection: Collection, record_id: int | None) -> bool:
        """Delete a record by identifier. True on success."""
        collection = Collection(collection)
        if record_id is None:
            return False
        record_id = _validate_id(record_id)

        self._limit(f"delete:{collection.value}", self._limits.delete)
        try:
            return await self._call(self._store.delete(collection.value, record_id))
        except Exception as exc:
            logger.error("Error deleting %s/%s: %s", collection.value, record_id, exc)
            return False

    # ── Home data singleton ─────────────────────────────────────────

    async def fetch_home_data(self, *, rate_limited: bool = True) -> HomeData | None:
        """Return the shared page-text record, or None when absent or unreachable."""
        if rate_limited:
            self._limit(f"fetch:{HOME_DATA}", self._limits.read)
        try:
            rows = await self._call(self._store.get_all(HOME_DATA))
        except Exception as exc:
            logger.error("Error fetching home data: %s", exc)
            return None
        return HomeData.from_fields(rows[0]) if rows else None

    async def update_home_data(self, fields: dict[str, Any]) -> HomeData | None:
        """Update the existing home-data row, or insert it when none exists."""
        self._limit(f"update:{HOME_DATA}", self._limits.update)
        known = set(HomeData.field_names())
        fields = {k: v for k, v in fields.items() if k in known}
        screen_link_fields(fields)

        try:
            rows = await self._call(self._store.get_all(HOME_DATA))
            if rows:
                row = await self._call(self._store.update(HOME_DATA, rows[0]["id"], fields))
            else:
                row = await self._call(self._store.create(HOME_DATA, fields))
        except Exception as exc:
            logger.error("Error updating home data: %s", exc)
            return None
        return HomeData.from_fields(row) if row else None

    # ── Files ───────────────────────────────────────────────────────

    async def upload_file(self, content: bytes, filename: str, folder: str) -> str | None:
        """Upload a binary asset and return its public URL, or None."""
        if self._files is None:
            logger.error("File upload requested but no file storage is configured")
            return None
        self._limit(f"upload:{folder}", self._limits.create)
        try:
            return await self._call(self._files.upload(content, filename, folder))
        except Exception as exc:
            logger.error("Error uploading file to %s: %s", folder, exc)
            return None

    async def delete_file(self, url: str) -> bool:
        """Delete a previously uploaded asset by its public URL."""
        if self._files is None or not url:
            return False
        self._limit("delete-file", self._limits.delete)
        try:
            return await self._call(self._files.delete(url))
        except Exception as exc:
            logger.error("Error deleting file %s: %s", url, exc)
            return False
