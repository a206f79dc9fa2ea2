"""Domain entities for the Home page link lists."""

from dataclasses import dataclass

from .record import EntityRecord


@dataclass
class QuickLink(EntityRecord):
    title: str = ""
    description: str = ""
    link: str = ""
    logo: str = ""
    display_order: int | None = None
    id: int | None = None


@dataclass
class SocialLink(EntityRecord):
    platform: str = ""
    link: str = ""
    logo: str = ""
    display_order: int | None = None
    id: int | None = None
