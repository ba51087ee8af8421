"""
RoomEase — Listings and their response shapes

Listings reference their owner (and reviews their author) by an opaque user
id.  Those references are resolved here with one column-only lookup per
batch; a deleted profile resolves to ``None`` instead of failing the read.
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable

import structlog
from sqlalchemy import select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.errors import NotFound
from roomease.models.listing import Listing
from roomease.models.review import Review
from roomease.models.user import User
from roomease.schemas.listing import ListingCreate, ListingResponse, OwnerSummary
from roomease.schemas.review import (
    AuthorSummary,
    ListingDetailResponse,
    ReviewResponse,
)
from roomease.services.rating_service import rating_summaries
from roomease.store import RecordStore, translate_store_errors

logger = structlog.get_logger("roomease.listing_service")


async def lookup_users(
    db: AsyncSession,
    user_ids: Iterable[uuid.UUID],
) -> dict[uuid.UUID, Row]:
    """Map user id -> (id, name, email, phone, profile_picture) row."""
    ids = set(user_ids)
    if not ids:
        return {}
    stmt = select(
        User.id, User.name, User.email, User.phone, User.profile_picture
    ).where(User.id.in_(list(ids)))
    with translate_store_errors("User"):
        rows = (await db.execute(stmt)).all()
    return {row.id: row for row in rows}


class ListingService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.listings = RecordStore(db, Listing)
        self.reviews = RecordStore(db, Review)

    async def create_listing(
        self,
        owner_id: uuid.UUID,
        payload: ListingCreate,
    ) -> ListingResponse:
        log = logger.bind(user_id=str(owner_id))
        log.info("create_listing_start", title=payload.title)

        listing = Listing(user_id=owner_id, **payload.model_dump())
        await self.listings.create(listing)

        log.info("create_listing_complete", listing_id=str(listing.id))
        [response] = await self.present_listings([listing])
        return response

    async def get_listing(self, listing_id: uuid.UUID) -> ListingDetailResponse:
        """Single listing with owner, rating aggregate and its reviews,
        newest first."""
        listing = await self.listings.get(listing_id)
        if listing is None:
            logger.warning("get_listing_not_found", listing_id=str(listing_id))
            raise NotFound("Listing not found")

        reviews = await self.reviews.find_all(
            Review.listing_id == listing_id,
            order_by=(Review.created_at.desc(), Review.id.desc()),
        )
        [summary] = await self.present_listings([listing], model=ListingDetailResponse)
        return summary.model_copy(update={"reviews": await self.present_reviews(reviews)})

    # ── Presentation ─────────────────────────────────────────────────────

    async def present_listings(
        self,
        listings: list[Listing],
        model: type[ListingResponse] = ListingResponse,
    ) -> list[Any]:
        ratings = await rating_summaries(self.db, [listing.id for listing in listings])
        owners = await lookup_users(self.db, [listing.user_id for listing in listings])

        presented = []
        for listing in listings:
            owner = owners.get(listing.user_id)
            rating = ratings[listing.id]
            presented.append(
                model.model_validate(listing).model_copy(
                    update={
                        "owner": OwnerSummary.model_validate(owner) if owner else None,
                        "average_rating": rating.average_rating,
                        "total_reviews": rating.total_reviews,
                    }
                )
            )
        return presented

    async def present_reviews(self, reviews: list[Review]) -> list[ReviewResponse]:
        authors = await lookup_users(self.db, [review.user_id for review in reviews])
        presented = []
        for review in reviews:
            author = authors.get(review.user_id)
            presented.append(
                ReviewResponse.model_validate(review).model_copy(
                    update={
                        "author": AuthorSummary.model_validate(author) if author else None
                    }
                )
            )
        return presented
