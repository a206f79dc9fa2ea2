"""Read-fallback resolution shared by every page field and collection."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def resolve_with_precedence(candidates: Sequence[T | None], default: T) -> T:
    """Return the first non-empty candidate, or ``default``.

    Candidates are given highest precedence first, e.g. ``[remote, local]``.
    Empty strings and empty collections count as missing.
    """
    for candidate in candidates:
        if candidate:
            return candidate
    return default
