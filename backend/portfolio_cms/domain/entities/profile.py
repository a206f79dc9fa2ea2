"""Domain entities for the About page — skills, experience, education."""

from dataclasses import dataclass, field

from .record import EntityRecord


@dataclass
class Skill(EntityRecord):
    name: str = ""
    description: str = ""
    icon: str = ""
    logo: str = ""
    display_order: int | None = None
    id: int | None = None


@dataclass
class Experience(EntityRecord):
    title: str = ""
    company: str = ""
    date: str = ""
    description: str = ""
    responsibilities: list[str] = field(default_factory=list)
    display_order: int | None = None
    id: int | None = None


@dataclass
class Education(EntityRecord):
    degree: str = ""
    institution: str = ""
    date: str = ""
    description: str = ""
    display_order: int | None = None
    id: int | None = None
