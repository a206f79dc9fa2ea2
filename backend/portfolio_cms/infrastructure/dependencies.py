"""FastAPI dependency injection — wires infrastructure to the application layer.

The rate limiter, local store, auth provider and edit session hold
process-wide state, so they (and everything built on them) are created once
and cached. ``reset_dependencies`` drops the cached instances; tests call it
after changing settings.
"""

from functools import lru_cache

from fastapi import Depends, Header

from portfolio_cms.application.interfaces import FileStorage, LocalStore, RecordStore
from portfolio_cms.application.services import (
    EditModeSession,
    MigrationRunner,
    PageEditor,
    PageLoader,
    RateLimiter,
    RateLimits,
    RemoteRecordClient,
)
from portfolio_cms.config import get_settings
from portfolio_cms.domain.exceptions import AuthenticationError
from portfolio_cms.infrastructure.auth.password_auth_provider import PasswordAuthProvider
from portfolio_cms.infrastructure.database.repositories import SQLAlchemyRecordStore
from portfolio_cms.infrastructure.database.session import async_session_factory
from portfolio_cms.infrastructure.http.http_record_store import HttpRecordStore
from portfolio_cms.infrastructure.providers import CredlyBadgeProvider, MediumFeedProvider
from portfolio_cms.infrastructure.storage.json_local_store import JsonFileLocalStore
from portfolio_cms.infrastructure.storage.local_file_storage import LocalFileStorage


# ── Shared state ────────────────────────────────────────────────────

@lru_cache
def get_rate_limiter() -> RateLimiter:
    return RateLimiter()


@lru_cache
def get_local_store() -> LocalStore:
    return JsonFileLocalStore(get_settings().local_store_path)


@lru_cache
def get_auth_provider() -> PasswordAuthProvider:
    settings = get_settings()
    return PasswordAuthProvider(
        email=settings.admin_email,
        password=settings.admin_password,
        ttl_seconds=settings.session_ttl_seconds,
    )


@lru_cache
def get_edit_session() -> EditModeSession:
    return EditModeSession(get_local_store(), get_auth_provider())


# ── Storage ─────────────────────────────────────────────────────────

@lru_cache
def get_record_store() -> RecordStore:
    """The database store, or a remote deployment when configured for ``http``."""
    settings = get_settings()
    if settings.record_store_backend == "http":
        return HttpRecordStore(
            base_url=settings.remote_api_url,
            api_key=settings.remote_api_key,
            timeout=settings.remote_timeout_seconds,
        )
    return SQLAlchemyRecordStore(async_session_factory)


@lru_cache
def get_file_storage() -> LocalFileStorage:
    settings = get_settings()
    return LocalFileStorage(upload_dir=settings.upload_dir, public_url=settings.public_upload_url)


@lru_cache
def get_remote_client() -> RemoteRecordClient:
    settings = get_settings()
    storage: FileStorage = get_file_storage()
    return RemoteRecordClient(
        get_record_store(),
        get_rate_limiter(),
        file_storage=storage,
        limits=RateLimits(
            create=settings.rate_limit_create,
            update=settings.rate_limit_update,
            delete=settings.rate_limit_delete,
            read=settings.rate_limit_read,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        timeout_seconds=settings.remote_timeout_seconds,
    )


# ── Services ────────────────────────────────────────────────────────

@lru_cache
def get_migration_runner() -> MigrationRunner:
    return MigrationRunner(get_local_store(), get_remote_client())


@lru_cache
def get_page_loader() -> PageLoader:
    settings = get_settings()
    return PageLoader(
        get_remote_client(),
        get_migration_runner(),
        get_local_store(),
        get_edit_session(),
        blog_provider=MediumFeedProvider(
            api_url=settings.medium_feed_api,
            timeout=settings.provider_timeout_seconds,
        ),
        badge_provider=CredlyBadgeProvider(
            base_url=settings.credly_base_url,
            proxies=settings.credly_proxies,
            timeout=settings.provider_timeout_seconds,
        ),
        blog_username=settings.medium_username,
        badge_username=settings.credly_username,
    )


@lru_cache
def get_page_editor() -> PageEditor:
    return PageEditor(get_remote_client(), get_page_loader(), get_local_store(), get_edit_session())


def reset_dependencies() -> None:
    """Drop every cached instance (settings included)."""
    if get_edit_session.cache_info().currsize:
        get_edit_session().close()
    for factory in (
        get_page_editor,
        get_page_loader,
        get_migration_runner,
        get_remote_client,
        get_file_storage,
        get_record_store,
        get_edit_session,
        get_auth_provider,
        get_local_store,
        get_rate_limiter,
        get_settings,
    ):
        factory.cache_clear()


# ── Request guards ──────────────────────────────────────────────────

async def get_bearer_token(authorization: str | None = Header(None)) -> str | None:
    """The token of an ``Authorization: Bearer ...`` header, if any."""
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    return authorization[7:].strip() or None


async def require_owner(
    token: str | None = Depends(get_bearer_token),
    auth: PasswordAuthProvider = Depends(get_auth_provider),
) -> str:
    """Require the owner's session token. Returns the token."""
    if auth.verify(token) is None:
        raise AuthenticationError("Sign in required")
    return token or ""


async def require_writer(
    token: str | None = Depends(get_bearer_token),
    auth: PasswordAuthProvider = Depends(get_auth_provider),
) -> None:
    """Record-store writes accept the owner session or the service API key."""
    api_key = get_settings().remote_api_key
    if api_key and token == api_key:
        return
    if auth.verify(token) is None:
        raise AuthenticationError("A valid bearer token is required")
