"""Unit tests for the MigrationRunner."""

import asyncio
import json

import pytest

from portfolio_cms.application.services import MigrationRunner, RateLimiter, RateLimits, RemoteRecordClient
from portfolio_cms.application.services.migration_runner import decode_legacy
from portfolio_cms.domain.entities import COLLECTIONS, Collection
from portfolio_cms.domain.exceptions import RateLimitExceededError


@pytest.fixture
def runner(local_store, client) -> MigrationRunner:
    return MigrationRunner(local_store, client)


def _legacy(local_store, key: str, value) -> None:
    local_store.set(key, json.dumps(value))


@pytest.mark.asyncio
async def test_quick_links_are_copied_with_field_mapping(runner, local_store, record_store):
    _legacy(local_store, "quickLinks", [
        {"title": "About", "description": "Me", "path": "/about"},
        {"title": "Blog", "description": "Posts", "path": "/blog"},
    ])

    report = await runner.migrate(Collection.QUICK_LINKS)

    assert report.migrated is True
    assert report.created == 2
    rows = record_store.rows("quick_links")
    assert [r["link"] for r in rows] == ["/about", "/blog"]
    assert [r["display_order"] for r in rows] == [0, 1]
    assert local_store.get("quickLinks_migrated") == "true"


@pytest.mark.asyncio
async def test_running_twice_creates_records_once(runner, local_store, record_store):
    _legacy(local_store, "skills", [{"name": "Python"}, {"name": "Go"}])

    await runner.migrate(Collection.SKILLS)
    second = await runner.migrate(Collection.SKILLS)

    assert record_store.count("create") == 2
    assert second.skipped_reason == "already migrated"


@pytest.mark.asyncio
async def test_concurrent_runs_create_records_once(runner, local_store, record_store):
    _legacy(local_store, "skills", [{"name": "Python"}, {"name": "Go"}])

    await asyncio.gather(runner.migrate(Collection.SKILLS), runner.migrate(Collection.SKILLS))

    assert len(record_store.rows("skills")) == 2


@pytest.mark.asyncio
async def test_remote_data_present_marks_migrated_without_copying(runner, local_store, record_store):
    record_store.seed("skills", {"name": "Remote"})
    _legacy(local_store, "skills", [{"name": "Local"}])

    report = await runner.migrate(Collection.SKILLS)

    assert report.skipped_reason == "remote already has data"
    assert record_store.count("create") == 0
    assert runner.is_migrated(Collection.SKILLS)


@pytest.mark.asyncio
async def test_emptied_remote_is_not_refilled(runner, local_store, record_store):
    _legacy(local_store, "education", [{"degree": "BSc"}])
    await runner.migrate(Collection.EDUCATION)
    await record_store.delete("education", 1)

    await runner.migrate(Collection.EDUCATION)

    assert record_store.rows("education") == []


@pytest.mark.asyncio
async def test_absent_legacy_data_marks_migrated(runner, local_store):
    report = await runner.migrate(Collection.ACHIEVEMENTS)
    assert report.skipped_reason == "no legacy data"
    assert local_store.get("achievements_migrated") == "true"


@pytest.mark.asyncio
async def test_corrupt_legacy_data_is_reported_and_marked(runner, local_store, record_store):
    local_store.set("experience", "{not json")

    report = await runner.migrate(Collection.EXPERIENCE)

    assert report.error is not None
    assert report.migrated is False
    assert runner.is_migrated(Collection.EXPERIENCE)
    assert record_store.count("create") == 0


@pytest.mark.asyncio
async def test_item_failure_does_not_abort_collection(runner, local_store, record_store):
    _legacy(local_store, "projects", [
        {"title": "Good one", "category": "Web"},
        {"title": ""},
        {"title": "Another"},
    ])

    report = await runner.migrate(Collection.PROJECTS)

    assert report.created == 2
    assert report.failed == ["projects[1]"]
    assert report.migrated is True
    rows = record_store.rows("projects")
    assert rows[0]["categories"] == ["Web"]
    assert rows[1]["categories"] == ["Uncategorized"]


@pytest.mark.asyncio
async def test_skills_get_default_icon(runner, local_store, record_store):
    _legacy(local_store, "skills", [{"name": "Python"}, {"name": "Go", "icon": "🐹"}])
    await runner.migrate(Collection.SKILLS)
    assert [r["icon"] for r in record_store.rows("skills")] == ["⚡", "🐹"]


@pytest.mark.asyncio
async def test_certifications_map_legacy_names(runner, local_store, record_store):
    _legacy(local_store, "certifications", [
        {"title": "OSCP", "issuer": "OffSec", "credentialUrl": "https://example.com/c", "badgeImage": "/b.png"},
    ])
    await runner.migrate(Collection.CERTIFICATIONS)
    row = record_store.rows("certifications")[0]
    assert row["name"] == "OSCP"
    assert row["url"] == "https://example.com/c"
    assert row["image"] == "/b.png"


def test_social_links_object_form_expands():
    raw = json.dumps({"email": "mailto:me@example.com", "github": "https://github.com/me"})
    items = decode_legacy(Collection.SOCIAL_LINKS, raw)
    assert [i["name"] for i in items] == ["Email", "LinkedIn", "GitHub", "TryHackMe"]
    assert items[2]["url"] == "https://github.com/me"


def test_object_form_rejected_for_other_collections():
    with pytest.raises(ValueError):
        decode_legacy(Collection.SKILLS, json.dumps({"name": "x"}))


@pytest.mark.asyncio
async def test_run_all_covers_every_collection(runner):
    results = await runner.run_all()
    assert list(results) == list(COLLECTIONS)


@pytest.mark.asyncio
async def test_rate_limited_check_leaves_flag_unset(local_store, record_store):
    client = RemoteRecordClient(record_store, RateLimiter(), limits=RateLimits(read=0))
    runner = MigrationRunner(local_store, client)
    _legacy(local_store, "skills", [{"name": "Python"}])

    with pytest.raises(RateLimitExceededError):
        await runner.migrate(Collection.SKILLS)
    results = await runner.run_all()

    assert results[Collection.SKILLS].error is not None
    assert not runner.is_migrated(Collection.SKILLS)
