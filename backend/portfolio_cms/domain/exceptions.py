"""Domain-specific exceptions — framework-independent."""

from enum import Enum


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class InputValidationError(Exception):
    """Raised when user-supplied input fails shape, length or content checks.

    Raised before any network call is made.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class RateLimitExceededError(Exception):
    """Raised when an operation key exceeds its attempts-per-window budget."""

    def __init__(self, key: str, limit: int, window_seconds: float):
        self.key = key
        self.limit = limit
        self.window_seconds = window_seconds
        super().__init__(
            f"Too many requests for '{key}' (limit {limit} per {window_seconds:g}s). "
            "Please wait a moment."
        )


class RecordStoreError(Exception):
    """Raised by record store adapters when the backend call fails."""

    def __init__(self, operation: str, collection: str, message: str):
        self.operation = operation
        self.collection = collection
        super().__init__(f"{operation} on '{collection}' failed: {message}")


class AuthenticationError(Exception):
    """Raised for bad credentials or a missing/expired owner session."""


class EditModeDisabledError(Exception):
    """Raised when an edit is attempted while editing is not unlocked."""

    def __init__(self, message: str = "Edit mode is not enabled for this session"):
        super().__init__(message)


class ProviderErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    BLOCKED = "blocked"
    UNAVAILABLE = "unavailable"
    INVALID_RESPONSE = "invalid_response"


_PROVIDER_MESSAGES = {
    ProviderErrorKind.NOT_FOUND: "Username not found. Please verify the configured username.",
    ProviderErrorKind.BLOCKED: (
        "Unable to reach the provider: the request was blocked by a "
        "cross-origin or network security policy."
    ),
    ProviderErrorKind.UNAVAILABLE: "The provider is currently unavailable. Please try again later.",
    ProviderErrorKind.INVALID_RESPONSE: "The provider returned data in an unexpected format.",
}


class ProviderError(Exception):
    """Raised when a third-party feed or badge provider fails.

    Provider-agnostic — ``kind`` decides the human-readable explanation.
    """

    def __init__(self, provider: str, kind: ProviderErrorKind, detail: str = ""):
        self.provider = provider
        self.kind = kind
        self.detail = detail
        super().__init__(f"[{provider}] {kind.value}: {detail}" if detail else f"[{provider}] {kind.value}")

    @property
    def user_message(self) -> str:
        return _PROVIDER_MESSAGES[self.kind]
