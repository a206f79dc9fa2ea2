"""Pydantic DTOs guarding user writes to the projects collection."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from portfolio_cms.domain.input_sanitizer import (
    looks_like_injection,
    sanitize_input,
)
from portfolio_cms.domain.exceptions import InputValidationError

TITLE_MAX = 200
DESCRIPTION_MAX = 5000
CATEGORIES_MAX = 20
TECHNOLOGIES_MAX = 50

_MESSAGES = {
    "title": f"Title must be between 1 and {TITLE_MAX} characters",
    "description": f"Description must be less than {DESCRIPTION_MAX} characters",
    "categories": "Too many categories",
    "technologies": "Too many technologies",
}


def _screen(value: str | None) -> str | None:
    if looks_like_injection(value):
        raise ValueError("Invalid input detected")
    return value


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX)
    description: str = Field("", max_length=DESCRIPTION_MAX)
    categories: list[str] = Field(default_factory=list, max_length=CATEGORIES_MAX)
    technologies: list[str] = Field(default_factory=list, max_length=TECHNOLOGIES_MAX)
    github: str | None = None

    @field_validator("title", "description")
    @classmethod
    def screen_text(cls, value: str | None) -> str | None:
        return _screen(value)

    def sanitized(self) -> dict[str, Any]:
        return {
            "title": sanitize_input(self.title),
            "description": sanitize_input(self.description),
            "categories": [sanitize_input(c) for c in self.categories],
            "technologies": [sanitize_input(t) for t in self.technologies],
            "github": sanitize_input(self.github) if self.github else None,
        }


class ProjectUpdate(BaseModel):
    """Schema for a partial project update — all fields optional."""

    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX)
    categories: list[str] | None = Field(None, max_length=CATEGORIES_MAX)
    technologies: list[str] | None = Field(None, max_length=TECHNOLOGIES_MAX)
    github: str | None = None

    @field_validator("title", "description")
    @classmethod
    def screen_text(cls, value: str | None) -> str | None:
        return _screen(value)

    def sanitized(self) -> dict[str, Any]:
        """Sanitise only the fields the caller actually supplied."""
        supplied = self.model_dump(exclude_unset=True)
        result: dict[str, Any] = {}
        for key, value in supplied.items():
            if key in ("categories", "technologies"):
                result[key] = [sanitize_input(v) for v in value or []]
            elif key == "github":
                result[key] = sanitize_input(value) if value else None
            else:
                result[key] = sanitize_input(value)
        return result


def _to_input_error(exc: ValidationError) -> InputValidationError:
    """Map the first pydantic error onto a user-facing validation error."""
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else "input"
    if error["type"] == "value_error":
        return InputValidationError(field, f"Invalid {field} input")
    return InputValidationError(field, _MESSAGES.get(field, error["msg"]))


def validate_project_create(fields: dict[str, Any]) -> dict[str, Any]:
    """Validate and sanitise a new project. Raises InputValidationError."""
    try:
        return ProjectCreate.model_validate(fields).sanitized()
    except ValidationError as exc:
        raise _to_input_error(exc) from exc


def validate_project_update(fields: dict[str, Any]) -> dict[str, Any]:
    """Validate and sanitise a partial project update. Raises InputValidationError."""
    try:
        return ProjectUpdate.model_validate(fields).sanitized()
    except ValidationError as exc:
        raise _to_input_error(exc) from exc
