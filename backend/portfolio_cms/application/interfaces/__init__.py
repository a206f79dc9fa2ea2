from .local_store import LocalStore
from .record_store import RecordStore
from .file_storage import FileStorage
from .auth_provider import AuthProvider, AuthSession, SessionListener
from .feed_provider import BlogFeedProvider, BadgeProvider

__all__ = [
    "LocalStore",
    "RecordStore",
    "FileStorage",
    "AuthProvider",
    "AuthSession",
    "SessionListener",
    "BlogFeedProvider",
    "BadgeProvider",
]
