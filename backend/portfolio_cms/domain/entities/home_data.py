"""Domain entity — the singleton record holding page-level text."""

from dataclasses import dataclass

from .record import EntityRecord


@dataclass
class HomeData(EntityRecord):
    """Shared page text (names, subtitles, descriptions) and the profile photo.

    Unlike the collections this is a single row; every field is optional so
    that partially filled rows fall back field by field.
    """

    name: str | None = None
    subtitle: str | None = None
    description: str | None = None
    profile_photo: str | None = None
    about_intro: str | None = None
    about_description: str | None = None
    projects_description: str | None = None
    id: int | None = None

    def get(self, field_name: str) -> str | None:
        """Return a non-empty text value for ``field_name`` or ``None``."""
        value = getattr(self, field_name, None)
        return value or None
