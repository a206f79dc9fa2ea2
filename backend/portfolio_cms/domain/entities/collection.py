"""Entity collection registry — one entry per remote collection."""

from dataclasses import dataclass
from enum import Enum

from .links import QuickLink, SocialLink
from .profile import Education, Experience, Skill
from .record import EntityRecord
from .showcase import Achievement, Certification, Project


class Collection(str, Enum):
    """Named collections held by the remote record store."""

    SKILLS = "skills"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    PROJECTS = "projects"
    ACHIEVEMENTS = "achievements"
    CERTIFICATIONS = "certifications"
    QUICK_LINKS = "quick_links"
    SOCIAL_LINKS = "social_links"


HOME_DATA = "home_data"


@dataclass(frozen=True)
class CollectionSpec:
    """Static description of a collection.

    ``legacy_key`` is the Local Persistence Store key the collection was kept
    under before the remote store existed. ``ordered`` collections carry a
    ``display_order`` field and are sorted by it; the rest are sorted by
    creation time.
    """

    collection: Collection
    entity_type: type[EntityRecord]
    legacy_key: str
    ordered: bool = True
    newest_first: bool = False

    @property
    def migration_flag_key(self) -> str:
        return f"{self.legacy_key}_migrated"


# Insertion order is the migration order.
COLLECTIONS: dict[Collection, CollectionSpec] = {
    spec.collection: spec
    for spec in (
        CollectionSpec(Collection.QUICK_LINKS, QuickLink, "quickLinks"),
        CollectionSpec(Collection.SOCIAL_LINKS, SocialLink, "socialLinks"),
        CollectionSpec(Collection.ACHIEVEMENTS, Achievement, "achievements"),
        CollectionSpec(Collection.CERTIFICATIONS, Certification, "certifications"),
        CollectionSpec(Collection.EXPERIENCE, Experience, "experience"),
        CollectionSpec(Collection.SKILLS, Skill, "skills"),
        CollectionSpec(Collection.EDUCATION, Education, "education"),
        CollectionSpec(
            Collection.PROJECTS, Project, "projects", ordered=False, newest_first=True
        ),
    )
}


def get_spec(collection: Collection | str) -> CollectionSpec:
    """Look up a collection spec by enum member or value."""
    return COLLECTIONS[Collection(collection)]
