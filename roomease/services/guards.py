"""
RoomEase — Favorite / Review uniqueness guard

Checks that run before any favorite or review write:

* the referenced listing exists
* a user favorites and reviews a listing at most once
* ratings are integers in [1, 5]
* only a review's author may change or remove it

The unique constraints on ``reviews`` and ``favorites`` back the duplicate
checks; a concurrent insert that slips past the check surfaces from the store
adapter as the same ``Conflict``.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.errors import Conflict, Forbidden, InvalidArgument, NotFound
from roomease.models.listing import Listing
from roomease.models.review import Favorite, Review
from roomease.store import RecordStore

logger = structlog.get_logger("roomease.guards")

MIN_RATING = 1
MAX_RATING = 5


def check_rating(rating: Optional[int]) -> int:
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidArgument(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}",
            error=f"rating={rating!r}",
        )
    return rating


class UniquenessGuard:
    def __init__(self, db: AsyncSession) -> None:
        self.listings = RecordStore(db, Listing)
        self.reviews = RecordStore(db, Review)
        self.favorites = RecordStore(db, Favorite)

    async def require_listing(self, listing_id: uuid.UUID) -> Listing:
        listing = await self.listings.get(listing_id)
        if listing is None:
            logger.warning("guard_listing_not_found", listing_id=str(listing_id))
            raise NotFound("Listing not found")
        return listing

    async def check_new_favorite(
        self,
        user_id: uuid.UUID,
        listing_id: Optional[uuid.UUID],
    ) -> Listing:
        if listing_id is None:
            raise InvalidArgument("Listing ID is required")

        listing = await self.require_listing(listing_id)

        existing = await self.favorites.find_one(
            Favorite.user_id == user_id, Favorite.listing_id == listing_id
        )
        if existing is not None:
            logger.warning(
                "guard_favorite_duplicate",
                user_id=str(user_id),
                listing_id=str(listing_id),
            )
            raise Conflict(
                "Listing already in favorites",
                error=f"duplicate key: user_id={user_id}, listing_id={listing_id}",
            )
        return listing

    async def check_new_review(
        self,
        user_id: uuid.UUID,
        listing_id: Optional[uuid.UUID],
        rating: Optional[int],
        comment: Optional[str],
    ) -> Listing:
        if listing_id is None or rating is None or not (comment and comment.strip()):
            raise InvalidArgument("Please provide listingId, rating, and comment")
        check_rating(rating)

        listing = await self.require_listing(listing_id)

        existing = await self.reviews.find_one(
            Review.user_id == user_id, Review.listing_id == listing_id
        )
        if existing is not None:
            logger.warning(
                "guard_review_duplicate",
                user_id=str(user_id),
                listing_id=str(listing_id),
            )
            raise Conflict(
                "You have already reviewed this listing",
                error=f"duplicate key: user_id={user_id}, listing_id={listing_id}",
            )
        return listing

    async def owned_review(
        self,
        user_id: uuid.UUID,
        review_id: uuid.UUID,
        action: str,
    ) -> Review:
        """Return the review if ``user_id`` wrote it."""
        review = await self.reviews.get(review_id)
        if review is None:
            raise NotFound("Review not found")
        if review.user_id != user_id:
            logger.warning(
                "guard_review_forbidden",
                user_id=str(user_id),
                review_id=str(review_id),
                action=action,
            )
            raise Forbidden(f"Not authorized to {action} this review")
        return review
