"""
RoomEase — ORM model registry.

Importing every model here ensures that Alembic (and any other tool that
inspects ``Base.metadata``) discovers all tables automatically.
"""

from roomease.models.user import User
from roomease.models.profile import PreferredLocation, ProfileDetails
from roomease.models.listing import Listing
from roomease.models.review import Favorite, Review

__all__ = [
    "User",
    "ProfileDetails",
    "PreferredLocation",
    "Listing",
    "Review",
    "Favorite",
]
