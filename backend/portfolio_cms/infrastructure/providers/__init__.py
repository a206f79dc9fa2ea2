from .medium_feed_provider import MediumFeedProvider
from .credly_badge_provider import CredlyBadgeProvider, extract_username

__all__ = [
    "MediumFeedProvider",
    "CredlyBadgeProvider",
    "extract_username",
]
