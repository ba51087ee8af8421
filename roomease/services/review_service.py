"""
RoomEase — Reviews
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.models.listing import Listing
from roomease.models.review import Review
from roomease.schemas.review import (
    ListingReviews,
    ListingSummary,
    MyReviewResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)
from roomease.services.guards import UniquenessGuard, check_rating
from roomease.services.listing_service import ListingService
from roomease.services.rating_service import summarize_ratings
from roomease.store import RecordStore

logger = structlog.get_logger("roomease.review_service")


class ReviewService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.reviews = RecordStore(db, Review)
        self.listings = RecordStore(db, Listing)
        self.guard = UniquenessGuard(db)
        self.presenter = ListingService(db)

    async def create_review(
        self,
        user_id: uuid.UUID,
        payload: ReviewCreate,
    ) -> ReviewResponse:
        log = logger.bind(user_id=str(user_id), listing_id=str(payload.listing_id))
        log.info("create_review_start")

        await self.guard.check_new_review(
            user_id, payload.listing_id, payload.rating, payload.comment
        )
        review = Review(
            listing_id=payload.listing_id,
            user_id=user_id,
            rating=payload.rating,
            comment=payload.comment.strip(),
        )
        await self.reviews.create(review)

        log.info("create_review_complete", review_id=str(review.id), rating=review.rating)
        [response] = await self.presenter.present_reviews([review])
        return response

    async def listing_reviews(self, listing_id: uuid.UUID) -> ListingReviews:
        """All reviews of a listing, newest first, with the rating aggregate."""
        reviews = await self.reviews.find_all(
            Review.listing_id == listing_id,
            order_by=(Review.created_at.desc(), Review.id.desc()),
        )
        summary = summarize_ratings(sum(r.rating for r in reviews), len(reviews))
        return ListingReviews(
            reviews=await self.presenter.present_reviews(reviews),
            total_reviews=summary.total_reviews,
            average_rating=summary.average_rating,
        )

    async def update_review(
        self,
        user_id: uuid.UUID,
        review_id: uuid.UUID,
        payload: ReviewUpdate,
    ) -> ReviewResponse:
        log = logger.bind(user_id=str(user_id), review_id=str(review_id))
        review = await self.guard.owned_review(user_id, review_id, "update")

        values: dict = {}
        if payload.rating is not None:
            values["rating"] = check_rating(payload.rating)
        if payload.comment is not None and payload.comment.strip():
            values["comment"] = payload.comment.strip()
        if values:
            await self.reviews.apply(review, values)

        log.info("update_review_complete", fields=sorted(values))
        [response] = await self.presenter.present_reviews([review])
        return response

    async def delete_review(self, user_id: uuid.UUID, review_id: uuid.UUID) -> None:
        review = await self.guard.owned_review(user_id, review_id, "delete")
        await self.reviews.delete(review.id)
        logger.info("delete_review_complete", user_id=str(user_id), review_id=str(review_id))

    async def my_reviews(self, user_id: uuid.UUID) -> list[MyReviewResponse]:
        reviews = await self.reviews.find_all(
            Review.user_id == user_id,
            order_by=(Review.created_at.desc(), Review.id.desc()),
        )
        listing_ids = {review.listing_id for review in reviews}
        listings = (
            {
                listing.id: listing
                for listing in await self.listings.find_all(Listing.id.in_(list(listing_ids)))
            }
            if listing_ids
            else {}
        )

        presented = []
        for review in reviews:
            listing = listings.get(review.listing_id)
            presented.append(
                MyReviewResponse.model_validate(review).model_copy(
                    update={
                        "listing": ListingSummary.model_validate(listing) if listing else None
                    }
                )
            )
        return presented
