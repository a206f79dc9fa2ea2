"""Uploaded asset endpoints — store and delete images."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from portfolio_cms.application.schemas import FileDeleteResponse, FileUploadResponse
from portfolio_cms.config import get_settings
from portfolio_cms.infrastructure.dependencies import get_file_storage, require_writer
from portfolio_cms.infrastructure.storage.local_file_storage import LocalFileStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["Files"], dependencies=[Depends(require_writer)])


async def read_upload(file: UploadFile) -> bytes:
    """Read an uploaded file, enforcing the configured size limit."""
    max_bytes = get_settings().max_upload_size_mb * 1024 * 1024
    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {get_settings().max_upload_size_mb} MB",
        )
    return content


@router.post("", response_model=FileUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile,
    folder: str = Query("uploads", min_length=1, max_length=40),
    storage: LocalFileStorage = Depends(get_file_storage),
) -> FileUploadResponse:
    """Store one file under ``folder`` and return its public URL."""
    content = await read_upload(file)
    url = await storage.upload(content, file.filename or "upload", folder)
    return FileUploadResponse(url=url, size=len(content))


@router.delete("", response_model=FileDeleteResponse)
async def delete_file(
    url: str = Query(..., min_length=1),
    storage: LocalFileStorage = Depends(get_file_storage),
) -> FileDeleteResponse:
    if not await storage.delete(url):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return FileDeleteResponse(deleted=True)
