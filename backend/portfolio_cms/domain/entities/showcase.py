"""Domain entities for projects, achievements and certifications."""

from dataclasses import dataclass, field

from .record import EntityRecord

UNCATEGORIZED = "Uncategorized"


@dataclass
class Project(EntityRecord):
    """A portfolio project. Projects carry no display order; newest first."""

    title: str = ""
    description: str = ""
    categories: list[str] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)
    github: str | None = None
    id: int | None = None

    def with_categories(self) -> "Project":
        """Return a copy that always has at least one category."""
        categories = list(self.categories) or [UNCATEGORIZED]
        return Project(
            title=self.title,
            description=self.description,
            categories=categories,
            technologies=list(self.technologies),
            github=self.github,
            id=self.id,
        )


@dataclass
class Achievement(EntityRecord):
    title: str = ""
    date: str = ""
    description: str = ""
    link: str = ""
    icon: str = ""
    display_order: int | None = None
    id: int | None = None


@dataclass
class Certification(EntityRecord):
    """Certification as stored remotely.

    The remote schema calls the title ``name`` and the credential link
    ``url``; legacy local data used ``title``/``credentialUrl``.
    """

    name: str = ""
    issuer: str = ""
    date: str = ""
    url: str = ""
    image: str = ""
    description: str = ""
    display_order: int | None = None
    id: int | None = None
