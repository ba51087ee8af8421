"""
RoomEase — Main API Router

Aggregates all sub-routers so that ``roomease.main`` can mount the entire API
surface under ``/api`` with one ``include_router`` call.
"""

from fastapi import APIRouter

from roomease.api import auth, favorites, listings, profiles, reviews

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Auth"])
router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
router.include_router(listings.router, prefix="/listings", tags=["Listings"])
router.include_router(reviews.router, prefix="/reviews", tags=["Reviews"])
router.include_router(favorites.router, prefix="/favorites", tags=["Favorites"])
