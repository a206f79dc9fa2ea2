"""Pydantic DTOs for owner sign-in and the edit-mode toggle."""

from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254, examples=["owner@example.com"])
    password: str = Field(..., min_length=1, max_length=256)


class LoginResponse(BaseModel):
    """Bearer token for the owner session."""

    token: str
    email: str
    expires_at: datetime


class SessionResponse(BaseModel):
    authenticated: bool
    email: str | None = None
    expires_at: datetime | None = None


class EditModeResponse(BaseModel):
    """``enabled`` is the persisted flag; ``can_edit`` also needs a live session."""

    enabled: bool
    authenticated: bool
    can_edit: bool
