"""Hosted record store endpoints — generic CRUD over the entity collections.

``home_data`` is accepted as a collection name and holds the single shared
page-text row. Reads are public; writes need a bearer token.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from portfolio_cms.application.interfaces import RecordStore
from portfolio_cms.application.schemas import validate_project_create, validate_project_update
from portfolio_cms.domain.entities import HOME_DATA, Collection, EntityRecord, HomeData, get_spec
from portfolio_cms.domain.exceptions import EntityNotFoundError
from portfolio_cms.domain.input_sanitizer import screen_link_fields
from portfolio_cms.infrastructure.dependencies import get_record_store, require_writer

router = APIRouter(prefix="/records", tags=["Records"])


def _entity_type(collection: str) -> type[EntityRecord]:
    if collection == HOME_DATA:
        return HomeData
    try:
        return get_spec(collection).entity_type
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown collection '{collection}'"
        )


def _known_fields(collection: str, body: dict[str, Any]) -> dict[str, Any]:
    known = set(_entity_type(collection).field_names())
    return {k: v for k, v in body.items() if k in known}


@router.get("/{collection}", response_model=list[dict[str, Any]])
async def list_records(
    collection: str,
    store: RecordStore = Depends(get_record_store),
) -> list[dict[str, Any]]:
    """All records of a collection in display order."""
    _entity_type(collection)
    return await store.get_all(collection)


@router.get("/{collection}/{record_id}", response_model=dict[str, Any])
async def get_record(
    collection: str,
    record_id: int,
    store: RecordStore = Depends(get_record_store),
) -> dict[str, Any]:
    _entity_type(collection)
    row = await store.get_by_id(collection, record_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(EntityNotFoundError(collection, record_id)),
        )
    return row


@router.post(
    "/{collection}",
    response_model=dict[str, Any],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_writer)],
)
async def create_record(
    collection: str,
    body: dict[str, Any] = Body(...),
    store: RecordStore = Depends(get_record_store),
) -> dict[str, Any]:
    """Create a record; unknown fields are dropped."""
    fields = _known_fields(collection, body)
    if collection == Collection.PROJECTS.value:
        fields = validate_project_create(fields)
    screen_link_fields(fields)
    if collection == HOME_DATA and await store.get_all(HOME_DATA):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="home_data already exists; update it instead",
        )
    return await store.create(collection, fields)


@router.patch(
    "/{collection}/{record_id}",
    response_model=dict[str, Any],
    dependencies=[Depends(require_writer)],
)
async def update_record(
    collection: str,
    record_id: int,
    body: dict[str, Any] = Body(...),
    store: RecordStore = Depends(get_record_store),
) -> dict[str, Any]:
    """Merge the given fields into an existing record."""
    fields = _known_fields(collection, body)
    if collection == Collection.PROJECTS.value:
        fields = validate_project_update(fields)
    screen_link_fields(fields)
    row = await store.update(collection, record_id, fields)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(EntityNotFoundError(collection, record_id)),
        )
    return row


@router.delete(
    "/{collection}/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_writer)],
)
async def delete_record(
    collection: str,
    record_id: int,
    store: RecordStore = Depends(get_record_store),
) -> None:
    _entity_type(collection)
    if not await store.delete(collection, record_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(EntityNotFoundError(collection, record_id)),
        )
