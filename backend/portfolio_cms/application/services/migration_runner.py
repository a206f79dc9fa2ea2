"""Migration Runner — one-time copy of legacy local data into the remote store.

For each collection: check the migration flag, check whether the remote store
already holds data, read the legacy local key, then create one remote record
per legacy item. The flag is set once the collection has been dealt with and
is never cleared here, so a later emptied remote collection is not refilled.

Item failures do not abort the collection: failed items are logged and
reported, and the flag is still set so a permanently bad record is not
retried on every start-up.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from portfolio_cms.application.interfaces import LocalStore
from portfolio_cms.application.services.remote_record_client import RemoteRecordClient
from portfolio_cms.domain.entities import (
    COLLECTIONS,
    UNCATEGORIZED,
    Achievement,
    Certification,
    Collection,
    Education,
    EntityRecord,
    Experience,
    Project,
    QuickLink,
    Skill,
    SocialLink,
    get_spec,
)
from portfolio_cms.domain.exceptions import InputValidationError, RateLimitExceededError
from portfolio_cms.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("MigrationRunner")

_FLAG_SET = "true"
DEFAULT_SKILL_ICON = "⚡"


@dataclass
class MigrationReport:
    """Outcome of migrating one collection."""

    collection: Collection
    migrated: bool = False
    created: int = 0
    failed: list[str] = field(default_factory=list)
    skipped_reason: str | None = None
    error: str | None = None


# ── Legacy → remote field mapping ───────────────────────────────────

def _text(item: dict[str, Any], *keys: str) -> str:
    """First non-empty string among ``keys``, else ''."""
    for key in keys:
        value = item.get(key)
        if value:
            return str(value)
    return ""


def _map_quick_link(item: dict[str, Any], index: int) -> QuickLink:
    return QuickLink(
        title=_text(item, "title"),
        description=_text(item, "description"),
        link=_text(item, "path"),
        logo=_text(item, "logo"),
        display_order=index,
    )


def _map_social_link(item: dict[str, Any], index: int) -> SocialLink:
    return SocialLink(
        platform=_text(item, "name"),
        link=_text(item, "url"),
        logo=_text(item, "logo"),
        display_order=index,
    )


def _map_achievement(item: dict[str, Any], index: int) -> Achievement:
    return Achievement(
        title=_text(item, "title"),
        date=_text(item, "date"),
        description=_text(item, "description"),
        link=_text(item, "link"),
        display_order=index,
    )


def _map_certification(item: dict[str, Any], index: int) -> Certification:
    return Certification(
        name=_text(item, "title", "name"),
        issuer=_text(item, "issuer"),
        date=_text(item, "date"),
        url=_text(item, "credentialUrl", "certificateUrl", "url"),
        image=_text(item, "badgeImage", "image"),
        description=_text(item, "description"),
        display_order=index,
    )


def _map_experience(item: dict[str, Any], index: int) -> Experience:
    return Experience(
        title=_text(item, "title"),
        company=_text(item, "company"),
        date=_text(item, "date"),
        description=_text(item, "description"),
        responsibilities=list(item.get("responsibilities") or []),
        display_order=index,
    )


def _map_skill(item: dict[str, Any], index: int) -> Skill:
    return Skill(
        name=_text(item, "name"),
        description=_text(item, "description"),
        icon=_text(item, "icon") or DEFAULT_SKILL_ICON,
        logo=_text(item, "logo"),
        display_order=index,
    )


def _map_education(item: dict[str, Any], index: int) -> Education:
    return Education(
        degree=_text(item, "degree"),
        institution=_text(item, "institution"),
        date=_text(item, "date"),
        description=_text(item, "description"),
        display_order=index,
    )


def _map_project(item: dict[str, Any], index: int) -> Project:
    categories = item.get("categories")
    if not categories:
        categories = [item["category"]] if item.get("category") else [UNCATEGORIZED]
    return Project(
        title=_text(item, "title"),
        description=_text(item, "description"),
        categories=list(categories),
        technologies=list(item.get("technologies") or []),
        github=_text(item, "github"),
    )


LegacyMapper = Callable[[dict[str, Any], int], EntityRecord]

LEGACY_MAPPERS: dict[Collection, LegacyMapper] = {
    Collection.QUICK_LINKS: _map_quick_link,
    Collection.SOCIAL_LINKS: _map_social_link,
    Collection.ACHIEVEMENTS: _map_achievement,
    Collection.CERTIFICATIONS: _map_certification,
    Collection.EXPERIENCE: _map_experience,
    Collection.SKILLS: _map_skill,
    Collection.EDUCATION: _map_education,
    Collection.PROJECTS: _map_project,
}


def decode_legacy(collection: Collection, raw: str) -> list[dict[str, Any]]:
    """Decode a legacy stored value into a list of legacy items.

    Social links were once stored as a ``{email, linkedin, github, tryhackme}``
    object; that form expands into four links. Raises ValueError when the
    value is not a JSON list (or that object form).
    """
    data = json.loads(raw)
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    if collection is Collection.SOCIAL_LINKS and isinstance(data, dict):
        return [
            {"name": "Email", "url": data.get("email", "")},
            {"name": "LinkedIn", "url": data.get("linkedin", "")},
            {"name": "GitHub", "url": data.get("github", "")},
            {"name": "TryHackMe", "url": data.get("tryhackme", "")},
        ]
    raise ValueError(f"expected a JSON list for '{collection.value}', got {type(data).__name__}")


# ── Runner ───────────────────────────────────────────────────────────

class MigrationRunner:
    """Copies legacy Local Persistence Store collections into the remote store."""

    def __init__(self, local_store: LocalStore, client: RemoteRecordClient):
        self._local = local_store
        self._client = client
        self._locks: dict[Collection, asyncio.Lock] = {}

    def is_migrated(self, collection: Collection) -> bool:
        return self._local.get(get_spec(collection).migration_flag_key) == _FLAG_SET

    def _mark_migrated(self, collection: Collection) -> None:
        self._local.set(get_spec(collection).migration_flag_key, _FLAG_SET)

    async def migrate(self, collection: Collection) -> MigrationReport:
        """Run the migration for one collection. Safe to call repeatedly.

        Raises RateLimitExceededError when the remote check cannot be made;
        the flag is left unset in that case.
        """
        collection = Collection(collection)
        lock = self._locks.setdefault(collection, asyncio.Lock())
        async with lock:
            return await self._migrate_locked(collection)

    async def _migrate_locked(self, collection: Collection) -> MigrationReport:
        spec = get_spec(collection)
        report = MigrationReport(collection=collection)

        plog.step_start(PipelineStage.CHECK, collection.value, flag=spec.migration_flag_key)
        if self.is_migrated(collection):
            report.skipped_reason = "already migrated"
            plog.step_skip(collection.value, reason=report.skipped_reason)
            return report

        plog.step_start(PipelineStage.FETCH, f"Checking remote {collection.value}")
        existing = await self._client.fetch_all(collection)
        if existing:
            self._mark_migrated(collection)
            report.skipped_reason = "remote already has data"
            plog.step_skip(collection.value, reason=report.skipped_reason, records=len(existing))
            return report

        raw = self._local.get(spec.legacy_key)
        if not raw:
            self._mark_migrated(collection)
            report.skipped_reason = "no legacy data"
            plog.step_skip(collection.value, reason=report.skipped_reason)
            return report

        try:
            items = decode_legacy(collection, raw)
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError
            self._mark_migrated(collection)
            report.error = f"Unreadable legacy data: {exc}"
            plog.step_error(PipelineStage.ERROR, f"{collection.value}: unreadable legacy data", error=exc)
            return report

        mapper = LEGACY_MAPPERS[collection]
        plog.step_start(PipelineStage.COPY, f"Copying {len(items)} {collection.value} record(s)")
        for index, item in enumerate(items):
            record = mapper(item, index)
            try:
                created = await self._client.create(collection, record, rate_limited=False)
            except InputValidationError as exc:
                created = None
                plog.detail(f"item {index} rejected", reason=exc.message)
            if created is None:
                report.failed.append(f"{collection.value}[{index}]")
                continue
            report.created += 1

        self._mark_migrated(collection)
        report.migrated = True
        if report.failed:
            plog.step_error(
                PipelineStage.ERROR,
                f"{collection.value}: {len(report.failed)} item(s) could not be copied",
            )
        plog.step_complete(
            PipelineStage.COMPLETE, collection.value, created=report.created, failed=len(report.failed)
        )
        return report

    async def run_all(self) -> dict[Collection, MigrationReport]:
        """Migrate every known collection, one at a time, in registry order."""
        results: dict[Collection, MigrationReport] = {}
        with plog.timed_step(PipelineStage.RUN, "Legacy data migration"):
            for collection in COLLECTIONS:
                try:
                    results[collection] = await self.migrate(collection)
                except RateLimitExceededError as exc:
                    plog.step_error(PipelineStage.ERROR, f"{collection.value}: deferred", error=exc)
                    results[collection] = MigrationReport(collection=collection, error=str(exc))

        migrated = [c.value for c, r in results.items() if r.migrated]
        if migrated:
            logger.info("Migrated legacy data: %s", ", ".join(migrated))
        else:
            logger.info("No legacy data to migrate or already migrated")
        return results
