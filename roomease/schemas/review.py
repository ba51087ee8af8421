from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from roomease.schemas.common import RequestModel, ResponseModel
from roomease.schemas.listing import ListingResponse


# ── Requests ─────────────────────────────────────────────────────────────────

class ReviewCreate(RequestModel):
    # Presence and rating range are checked by the review guard so that a
    # missing field reads as a plain InvalidArgument message.
    listing_id: Optional[UUID] = None
    rating: Optional[int] = None
    comment: Optional[str] = Field(None, max_length=500)


class ReviewUpdate(RequestModel):
    rating: Optional[int] = None
    comment: Optional[str] = Field(None, max_length=500)


# ── Responses ────────────────────────────────────────────────────────────────

class AuthorSummary(ResponseModel):
    id: UUID
    name: str
    profile_picture: Optional[str] = None


class ListingSummary(ResponseModel):
    id: UUID
    title: str
    location: str
    rent: float
    type: str
    images: list[str] = []


class ReviewResponse(ResponseModel):
    id: UUID
    listing_id: UUID
    user_id: UUID
    author: Optional[AuthorSummary] = None
    rating: int
    comment: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class MyReviewResponse(ResponseModel):
    id: UUID
    listing_id: UUID
    listing: Optional[ListingSummary] = None
    rating: int
    comment: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class ListingReviews(ResponseModel):
    reviews: list[ReviewResponse]
    total_reviews: int
    average_rating: float


class ListingDetailResponse(ListingResponse):
    reviews: list[ReviewResponse] = []
