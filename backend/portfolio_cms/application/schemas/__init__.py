from .project import ProjectCreate, ProjectUpdate, validate_project_create, validate_project_update
from .auth import EditModeResponse, LoginRequest, LoginResponse, SessionResponse
from .pages import (
    FeedStateSchema,
    FieldResponse,
    FieldUpdate,
    MigrationReportSchema,
    MigrationRunResponse,
    PageResponse,
)
from .files import FileDeleteResponse, FileUploadResponse

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "validate_project_create",
    "validate_project_update",
    "LoginRequest",
    "LoginResponse",
    "SessionResponse",
    "EditModeResponse",
    "FeedStateSchema",
    "PageResponse",
    "FieldUpdate",
    "FieldResponse",
    "MigrationReportSchema",
    "MigrationRunResponse",
    "FileUploadResponse",
    "FileDeleteResponse",
]
