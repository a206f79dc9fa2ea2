"""In-memory fakes of the application ports, shared by the unit tests."""

import asyncio
from typing import Any

import pytest

from portfolio_cms.application.interfaces import FileStorage, RecordStore
from portfolio_cms.application.services import RateLimiter, RemoteRecordClient
from portfolio_cms.domain.exceptions import RecordStoreError
from portfolio_cms.infrastructure.storage.json_local_store import MemoryLocalStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRecordStore(RecordStore):
    """In-memory record store; counts calls and can be told to fail or stall."""

    def __init__(self):
        self._rows: dict[str, dict[int, dict[str, Any]]] = {}
        self._next_id = 1
        self.calls: list[str] = []
        self.fail = False
        self.delay = 0.0

    async def _enter(self, operation: str, collection: str) -> None:
        self.calls.append(operation)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RecordStoreError(operation, collection, "backend down")

    def seed(self, collection: str, *rows: dict[str, Any]) -> None:
        for row in rows:
            record_id = self._next_id
            self._next_id += 1
            self._rows.setdefault(collection, {})[record_id] = {**row, "id": record_id}

    def rows(self, collection: str) -> list[dict[str, Any]]:
        return list(self._rows.get(collection, {}).values())

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        await self._enter("get_all", collection)
        return [dict(row) for row in self.rows(collection)]

    async def get_by_id(self, collection: str, record_id: int) -> dict[str, Any] | None:
        await self._enter("get_by_id", collection)
        row = self._rows.get(collection, {}).get(record_id)
        return dict(row) if row else None

    async def create(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        await self._enter("create", collection)
        self.seed(collection, fields)
        return dict(self.rows(collection)[-1])

    async def update(
        self, collection: str, record_id: int, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        await self._enter("update", collection)
        row = self._rows.get(collection, {}).get(record_id)
        if row is None:
            return None
        row.update(fields)
        return dict(row)

    async def delete(self, collection: str, record_id: int) -> bool:
        await self._enter("delete", collection)
        return self._rows.get(collection, {}).pop(record_id, None) is not None


class FakeFileStorage(FileStorage):
    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_uploads = False

    async def upload(self, content: bytes, filename: str, folder: str) -> str:
        if self.fail_uploads:
            raise OSError("disk full")
        url = f"/uploads/{folder}/{len(self.files) + 1}-{filename}"
        self.files[url] = content
        return url

    async def delete(self, url: str) -> bool:
        self.deleted.append(url)
        return self.files.pop(url, None) is not None


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def record_store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def file_storage() -> FakeFileStorage:
    return FakeFileStorage()


@pytest.fixture
def local_store() -> MemoryLocalStore:
    return MemoryLocalStore()


@pytest.fixture
def rate_limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(clock=clock)


@pytest.fixture
def client(
    record_store: FakeRecordStore,
    rate_limiter: RateLimiter,
    file_storage: FakeFileStorage,
) -> RemoteRecordClient:
    return RemoteRecordClient(record_store, rate_limiter, file_storage=file_storage)
