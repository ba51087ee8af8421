"""
RoomEase — Reviews API

Writes require a bearer token; only a review's author may change or remove
it.  The per-listing read is public.
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.auth import get_current_user_id
from roomease.database import get_db
from roomease.schemas.common import Envelope, MessageEnvelope
from roomease.schemas.review import (
    ListingReviews,
    MyReviewResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)
from roomease.services.review_service import ReviewService

logger = structlog.get_logger("roomease.api.reviews")

router = APIRouter()


# ──────────────────────────────────────────────────────────────────────────────
# POST "" — Review a listing
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=Envelope[ReviewResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a review",
)
async def create_review(
    payload: ReviewCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> Envelope[ReviewResponse]:
    review = await ReviewService(db).create_review(user_id, payload)
    return Envelope(message="Review added successfully", data=review)


# ──────────────────────────────────────────────────────────────────────────────
# GET /my-reviews — Reviews written by the caller
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/my-reviews",
    response_model=Envelope[list[MyReviewResponse]],
    summary="List my reviews",
)
async def my_reviews(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> Envelope[list[MyReviewResponse]]:
    return Envelope(data=await ReviewService(db).my_reviews(user_id))


# ──────────────────────────────────────────────────────────────────────────────
# GET /listing/{listing_id} — Reviews of one listing
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/listing/{listing_id}",
    response_model=Envelope[ListingReviews],
    summary="List reviews for a listing",
)
async def listing_reviews(
    listing_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Envelope[ListingReviews]:
    return Envelope(data=await ReviewService(db).listing_reviews(listing_id))


# ──────────────────────────────────────────────────────────────────────────────
# PUT /{review_id} — Edit own review
# ──────────────────────────────────────────────────────────────────────────────

@router.put(
    "/{review_id}",
    response_model=Envelope[ReviewResponse],
    summary="Update a review",
)
async def update_review(
    review_id: uuid.UUID,
    payload: ReviewUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> Envelope[ReviewResponse]:
    review = await ReviewService(db).update_review(user_id, review_id, payload)
    return Envelope(message="Review updated successfully", data=review)


# ──────────────────────────────────────────────────────────────────────────────
# DELETE /{review_id} — Remove own review
# ──────────────────────────────────────────────────────────────────────────────

@router.delete(
    "/{review_id}",
    response_model=MessageEnvelope,
    summary="Delete a review",
)
async def delete_review(
    review_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> MessageEnvelope:
    await ReviewService(db).delete_review(user_id, review_id)
    return MessageEnvelope(message="Review deleted successfully")
