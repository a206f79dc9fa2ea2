"""Pydantic DTOs for uploaded assets."""

from pydantic import BaseModel


class FileUploadResponse(BaseModel):
    url: str
    size: int


class FileDeleteResponse(BaseModel):
    deleted: bool
