"""Input screening and sanitisation applied before user writes reach the store."""

import logging
import re
from typing import Any

from portfolio_cms.domain.exceptions import InputValidationError

logger = logging.getLogger(__name__)

# Signatures of injection attempts, not plain SQL vocabulary: "Create a tool"
# must pass, "x'; DROP TABLE projects" must not.
_INJECTION_PATTERNS = (
    re.compile(r";\s*(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE|TRUNCATE)\b", re.IGNORECASE),
    re.compile(r"\bUNION\s+(ALL\s+)?SELECT\b", re.IGNORECASE),
    re.compile(r"['\"]\s*(OR|AND)\s+\S+\s*=\s*\S+", re.IGNORECASE),
    re.compile(r"/\*|\*/"),
    re.compile(r"<\s*script\b", re.IGNORECASE),
)

_STRIP_PATTERNS = (
    re.compile(r"[<>]"),
    re.compile(r"--"),
    re.compile(r";"),
)

_DANGEROUS_SCHEMES = ("javascript:", "data:", "vbscript:", "file:")
_ALLOWED_URL = re.compile(r"^(https?://|mailto:|/|\./|\.\./)", re.IGNORECASE)
LINK_FIELDS = ("link", "url", "github")


def looks_like_injection(value: str | None) -> bool:
    """True when ``value`` matches a known injection signature."""
    if not value:
        return False
    for pattern in _INJECTION_PATTERNS:
        if pattern.search(value):
            logger.warning("Potential injection attempt detected")
            return True
    return False


def sanitize_input(value: str | None) -> str:
    """Strip angle brackets, SQL comment markers and semicolons, then trim."""
    if not value:
        return ""
    for pattern in _STRIP_PATTERNS:
        value = pattern.sub("", value)
    return value.strip()


def is_dangerous_url(url: str | None) -> bool:
    """True for script-capable or local-file URL schemes."""
    if not url:
        return False
    return url.strip().lower().startswith(_DANGEROUS_SCHEMES)


def sanitize_url(url: str | None) -> str | None:
    """Return a trimmed URL, or None for dangerous or unsupported schemes."""
    if not url:
        return None
    trimmed = url.strip()
    lowered = trimmed.lower()
    if is_dangerous_url(trimmed):
        logger.warning("Blocked dangerous URL: %s", url)
        return None
    if lowered != "#" and not _ALLOWED_URL.match(lowered):
        logger.warning("Invalid URL protocol: %s", url)
        return None
    return trimmed


def screen_link_fields(fields: dict[str, Any]) -> None:
    """Raise InputValidationError when a record link uses a dangerous scheme."""
    for key in LINK_FIELDS:
        value = fields.get(key)
        if isinstance(value, str) and is_dangerous_url(value):
            logger.warning("Rejected %s with unsupported scheme", key)
            raise InputValidationError(key, f"Invalid {key}: unsupported URL scheme")
