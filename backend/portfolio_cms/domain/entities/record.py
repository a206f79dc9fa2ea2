"""Base behaviour shared by every portfolio entity record."""

from dataclasses import fields
from typing import Any, Self


class EntityRecord:
    """Mixin for dataclass entities persisted in the remote record store.

    ``id`` is ``None`` until the backend assigns one. A record without an
    identifier only exists locally (or as hard-coded default content) and has
    never been persisted remotely; once present, all further edits must target
    that identifier.
    """

    id: int | None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of the remote schema fields, excluding the identifier."""
        return tuple(f.name for f in fields(cls) if f.name != "id")  # type: ignore[arg-type]

    @classmethod
    def from_fields(cls, data: dict[str, Any]) -> Self:
        """Build an entity from a plain field map, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})

    def to_fields(self) -> dict[str, Any]:
        """Return the remote schema field map (no identifier, no unset values)."""
        result: dict[str, Any] = {}
        for name in self.field_names():
            value = getattr(self, name)
            if value is None:
                continue
            result[name] = list(value) if isinstance(value, list) else value
        return result

    def to_dict(self) -> dict[str, Any]:
        """Field map including the identifier — used for API responses."""
        return {"id": self.id, **self.to_fields()}
