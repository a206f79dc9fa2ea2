"""API test fixtures.

Settings are read from the environment, and the database engine is built at
import time, so the environment is pointed at a scratch directory before any
``portfolio_cms`` module is imported.
"""

import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

_SCRATCH = Path(tempfile.mkdtemp(prefix="portfolio-cms-tests-"))

os.environ.update(
    {
        "DATABASE_URL": f"sqlite:///{_SCRATCH / 'portfolio.db'}",
        "LOCAL_STORE_PATH": str(_SCRATCH / "local_store.json"),
        "UPLOAD_DIR": str(_SCRATCH / "uploads"),
        "ADMIN_EMAIL": "owner@example.com",
        "ADMIN_PASSWORD": "correct-horse",
        "REMOTE_API_KEY": "service-key",
        "RECORD_STORE_BACKEND": "database",
        "MEDIUM_USERNAME": "",
        "CREDLY_USERNAME": "",
    }
)

from httpx import ASGITransport, AsyncClient  # noqa: E402

from portfolio_cms.infrastructure.database import Base, engine  # noqa: E402
from portfolio_cms.infrastructure.dependencies import reset_dependencies  # noqa: E402
from portfolio_cms.main import app  # noqa: E402

OWNER_EMAIL = "owner@example.com"
OWNER_PASSWORD = "correct-horse"
API_KEY = "service-key"


@pytest_asyncio.fixture
async def api():
    """A fresh database, local store and dependency graph per test."""
    reset_dependencies()
    Path(os.environ["LOCAL_STORE_PATH"]).unlink(missing_ok=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    reset_dependencies()
    await engine.dispose()


@pytest.fixture
def service_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {API_KEY}"}


async def login(client: AsyncClient) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/login", json={"email": OWNER_EMAIL, "password": OWNER_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def owner_headers(api) -> dict[str, str]:
    return await login(api)


@pytest_asyncio.fixture
async def editor_headers(api, owner_headers) -> dict[str, str]:
    response = await api.post("/api/v1/edit-mode/toggle", headers=owner_headers)
    assert response.json()["can_edit"] is True
    return owner_headers
