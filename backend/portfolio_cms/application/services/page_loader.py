"""Page Data Loaders — assemble what a page displays.

For each collection of the page: run its migration step, fetch it remotely,
and fall back to the hard-coded defaults when the fetch comes back empty.
Page texts resolve as remote home-data field, then local saved value, then
default. Third-party feeds load into a FeedState that keeps "empty" and
"failed" apart.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from portfolio_cms.application.interfaces import BadgeProvider, BlogFeedProvider, LocalStore
from portfolio_cms.application.services.edit_mode_session import EditModeSession
from portfolio_cms.application.services.fallback import resolve_with_precedence
from portfolio_cms.application.services.migration_runner import MigrationRunner
from portfolio_cms.application.services.page_catalogue import (
    Feed,
    PageSpec,
    TextFieldSpec,
    default_collection,
)
from portfolio_cms.application.services.remote_record_client import RemoteRecordClient
from portfolio_cms.domain.entities import (
    Collection,
    EntityRecord,
    FeedState,
    FeedStatus,
    HomeData,
    Project,
)
from portfolio_cms.domain.exceptions import ProviderError, RateLimitExceededError

logger = logging.getLogger(__name__)


@dataclass
class PageData:
    """Everything one page needs to render."""

    page: str
    collections: dict[Collection, list[EntityRecord]] = field(default_factory=dict)
    texts: dict[str, str] = field(default_factory=dict)
    feeds: dict[str, FeedState] = field(default_factory=dict)
    profile_photo: str | None = None
    can_edit: bool = False


class PageLoader:
    """Loads pages through the remote client with local and default fallbacks."""

    def __init__(
        self,
        client: RemoteRecordClient,
        migrations: MigrationRunner,
        local_store: LocalStore,
        edit_session: EditModeSession,
        *,
        blog_provider: BlogFeedProvider | None = None,
        badge_provider: BadgeProvider | None = None,
        blog_username: str = "",
        badge_username: str = "",
    ) -> None:
        self._client = client
        self._migrations = migrations
        self._local = local_store
        self._edit = edit_session
        self._blog = blog_provider
        self._badges = badge_provider
        self._blog_username = blog_username
        self._badge_username = badge_username

    async def load(self, page: PageSpec, *, rate_limited: bool = True) -> PageData:
        """Resolve a whole page. Anonymous views pass ``rate_limited=False``."""
        data = PageData(page=page.name, can_edit=self._edit.can_edit())

        for collection in page.collections:
            data.collections[collection] = await self.load_collection(
                collection, rate_limited=rate_limited
            )

        home = await self.load_home_data(rate_limited=rate_limited) if page.text_fields or page.shows_profile_photo else None
        for spec in page.text_fields:
            data.texts[spec.name] = self.resolve_text(spec, home)
        if page.shows_profile_photo and home is not None:
            data.profile_photo = home.profile_photo

        for feed in page.feeds:
            data.feeds[feed] = await self.load_feed(feed)
        return data

    async def load_collection(
        self, collection: Collection, *, rate_limited: bool = True
    ) -> list[EntityRecord]:
        """Migrate (idempotently), fetch, then fall back to defaults when empty."""
        try:
            await self._migrations.migrate(collection)
        except RateLimitExceededError as exc:
            logger.warning("Migration of %s deferred: %s", collection.value, exc)
        try:
            remote = await self._client.fetch_all(collection, rate_limited=rate_limited)
        except RateLimitExceededError as exc:
            logger.warning("Showing default %s: %s", collection.value, exc)
            remote = []

        records = resolve_with_precedence([remote], default_collection(collection))
        if collection is Collection.PROJECTS:
            records = [r.with_categories() for r in records if isinstance(r, Project)]
        return records

    async def load_home_data(self, *, rate_limited: bool = True) -> HomeData | None:
        try:
            return await self._client.fetch_home_data(rate_limited=rate_limited)
        except RateLimitExceededError as exc:
            logger.warning("Home data not loaded: %s", exc)
            return None

    def resolve_text(self, spec: TextFieldSpec, home: HomeData | None) -> str:
        remote = home.get(spec.remote_field) if home is not None and spec.remote_field else None
        return resolve_with_precedence([remote, self._local.get(spec.local_key)], spec.default)

    async def load_feed(self, feed: str) -> FeedState:
        if feed == Feed.BLOG:
            provider, username = self._blog, self._blog_username
            fetch = provider.fetch_posts if provider else None
        elif feed == Feed.BADGES:
            provider, username = self._badges, self._badge_username
            fetch = provider.fetch_badges if provider else None
        else:
            raise ValueError(f"Unknown feed: {feed}")

        if fetch is None or not username:
            return FeedState(status=FeedStatus.EMPTY)
        try:
            items = await fetch(username)
        except ProviderError as exc:
            logger.error("%s feed failed: %s", feed, exc)
            return FeedState(status=FeedStatus.ERROR, error=exc.user_message)

        if feed == Feed.BADGES:
            now = datetime.now(timezone.utc)
            items = [badge for badge in items if badge.is_active(now)]
        return FeedState(status=FeedStatus.OK if items else FeedStatus.EMPTY, items=items)
