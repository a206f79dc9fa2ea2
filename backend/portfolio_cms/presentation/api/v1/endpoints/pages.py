"""Page endpoints — resolved page data for visitors, inline edits for the owner."""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, UploadFile, status

from portfolio_cms.application.schemas import (
    FeedStateSchema,
    FieldResponse,
    FieldUpdate,
    PageResponse,
)
from portfolio_cms.application.services import PageData, PageEditor, PageLoader
from portfolio_cms.application.services.page_catalogue import PageSpec, get_page
from portfolio_cms.domain.entities import Collection
from portfolio_cms.infrastructure.auth.password_auth_provider import PasswordAuthProvider
from portfolio_cms.infrastructure.dependencies import (
    get_auth_provider,
    get_bearer_token,
    get_page_editor,
    get_page_loader,
    require_owner,
)
from portfolio_cms.presentation.api.v1.endpoints.files import read_upload

router = APIRouter(prefix="/pages", tags=["Pages"])


# ── Helpers ──────────────────────────────────────────────────────────

def _page(name: str) -> PageSpec:
    page = get_page(name)
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown page '{name}'")
    return page


def _collection(name: str) -> Collection:
    try:
        return Collection(name)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown collection '{name}'"
        )


def _to_response(data: PageData, is_owner: bool) -> PageResponse:
    return PageResponse(
        page=data.page,
        collections={
            collection.value: [record.to_dict() for record in records]
            for collection, records in data.collections.items()
        },
        texts=data.texts,
        feeds={
            name: FeedStateSchema(
                status=state.status.value,
                items=[asdict(item) for item in state.items],
                error=state.error,
            )
            for name, state in data.feeds.items()
        },
        profile_photo=data.profile_photo,
        can_edit=is_owner and data.can_edit,
    )


# ── Endpoints ────────────────────────────────────────────────────────

@router.get("/{page}", response_model=PageResponse)
async def get_page_data(
    page: str,
    token: str | None = Depends(get_bearer_token),
    auth: PasswordAuthProvider = Depends(get_auth_provider),
    loader: PageLoader = Depends(get_page_loader),
) -> PageResponse:
    """Everything the page shows, with remote, local and default fallbacks applied."""
    is_owner = auth.verify(token) is not None
    data = await loader.load(_page(page), rate_limited=is_owner)
    return _to_response(data, is_owner)


@router.put(
    "/{page}/fields/{field}",
    response_model=FieldResponse,
    dependencies=[Depends(require_owner)],
)
async def update_field(
    page: str,
    field: str,
    data: FieldUpdate,
    editor: PageEditor = Depends(get_page_editor),
) -> FieldResponse:
    value = await editor.commit_text(_page(page), field, data.value)
    return FieldResponse(page=page, field=field, value=value)


@router.post(
    "/{page}/items/{collection}",
    response_model=dict[str, Any],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_owner)],
)
async def add_item(
    page: str,
    collection: str,
    fields: dict[str, Any] | None = Body(None),
    editor: PageEditor = Depends(get_page_editor),
) -> dict[str, Any]:
    """Add an item, starting from the collection's template."""
    record = await editor.add_item(_page(page), _collection(collection), fields)
    return record.to_dict()


@router.patch(
    "/{page}/items/{collection}/{record_id}",
    response_model=dict[str, Any],
    dependencies=[Depends(require_owner)],
)
async def update_item(
    page: str,
    collection: str,
    record_id: int,
    fields: dict[str, Any] = Body(...),
    editor: PageEditor = Depends(get_page_editor),
) -> dict[str, Any]:
    record = await editor.update_item(_page(page), _collection(collection), record_id, fields)
    return record.to_dict()


@router.delete(
    "/{page}/items/{collection}/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_owner)],
)
async def delete_item(
    page: str,
    collection: str,
    record_id: int,
    editor: PageEditor = Depends(get_page_editor),
) -> None:
    await editor.delete_item(_page(page), _collection(collection), record_id)


@router.post(
    "/{page}/items/{collection}/{record_id}/image",
    response_model=dict[str, Any],
    dependencies=[Depends(require_owner)],
)
async def upload_item_image(
    page: str,
    collection: str,
    record_id: int,
    file: UploadFile,
    editor: PageEditor = Depends(get_page_editor),
) -> dict[str, Any]:
    """Replace an item's image (old file removed first)."""
    content = await read_upload(file)
    record = await editor.upload_item_image(
        _page(page), _collection(collection), record_id, content, file.filename or "image"
    )
    return record.to_dict()


@router.post("/{page}/photo", response_model=dict[str, Any], dependencies=[Depends(require_owner)])
async def upload_profile_photo(
    page: str,
    file: UploadFile,
    editor: PageEditor = Depends(get_page_editor),
) -> dict[str, Any]:
    content = await read_upload(file)
    home = await editor.upload_profile_photo(_page(page), content, file.filename or "photo")
    return home.to_dict()
