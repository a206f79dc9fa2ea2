from .rate_limiter import RateLimiter
from .remote_record_client import RateLimits, RemoteRecordClient
from .migration_runner import MigrationReport, MigrationRunner
from .editable_field import EditableField, FieldState
from .edit_mode_session import EditModeSession
from .page_loader import PageData, PageLoader
from .page_editor import PageEditor

__all__ = [
    "RateLimiter",
    "RateLimits",
    "RemoteRecordClient",
    "MigrationReport",
    "MigrationRunner",
    "EditableField",
    "FieldState",
    "EditModeSession",
    "PageData",
    "PageLoader",
    "PageEditor",
]
