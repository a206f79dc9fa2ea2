from .record import EntityRecord
from .profile import Skill, Experience, Education
from .showcase import Project, Achievement, Certification, UNCATEGORIZED
from .links import QuickLink, SocialLink
from .home_data import HomeData
from .feed import BlogPost, Badge, FeedStatus, FeedState
from .collection import Collection, CollectionSpec, COLLECTIONS, HOME_DATA, get_spec

__all__ = [
    "EntityRecord",
    "Skill",
    "Experience",
    "Education",
    "Project",
    "Achievement",
    "Certification",
    "UNCATEGORIZED",
    "QuickLink",
    "SocialLink",
    "HomeData",
    "BlogPost",
    "Badge",
    "FeedStatus",
    "FeedState",
    "Collection",
    "CollectionSpec",
    "COLLECTIONS",
    "HOME_DATA",
    "get_spec",
]
