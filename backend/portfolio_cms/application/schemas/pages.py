"""Pydantic DTOs for page reads and owner page edits."""

from typing import Any

from pydantic import BaseModel, Field


class FeedStateSchema(BaseModel):
    status: str
    items: list[dict[str, Any]] = []
    error: str | None = None


class PageResponse(BaseModel):
    """Everything one page displays, already resolved through its fallbacks."""

    page: str
    collections: dict[str, list[dict[str, Any]]] = {}
    texts: dict[str, str] = {}
    feeds: dict[str, FeedStateSchema] = {}
    profile_photo: str | None = None
    can_edit: bool = False


class FieldUpdate(BaseModel):
    value: str = Field(..., max_length=20000)


class FieldResponse(BaseModel):
    page: str
    field: str
    value: str


class MigrationReportSchema(BaseModel):
    collection: str
    migrated: bool
    created: int
    failed: list[str] = []
    skipped_reason: str | None = None
    error: str | None = None


class MigrationRunResponse(BaseModel):
    reports: list[MigrationReportSchema]
