from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from roomease.schemas.common import RequestModel, ResponseModel


# ── Requests ─────────────────────────────────────────────────────────────────

class ListingCreate(RequestModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    location: str = Field(min_length=1, max_length=200)
    rent: float = Field(ge=0)
    type: str = Field(min_length=1, max_length=40)
    images: list[str] = []
    amenities: list[str] = []

    @field_validator("title", "location", "type")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


# ── Responses ────────────────────────────────────────────────────────────────

class OwnerSummary(ResponseModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    profile_picture: Optional[str] = None


class ListingResponse(ResponseModel):
    """A listing with its owner resolved and its rating aggregate attached.

    ``owner`` is ``None`` when the owning profile has been deleted.
    """

    id: UUID
    user_id: UUID
    owner: Optional[OwnerSummary] = None
    title: str
    description: Optional[str] = None
    location: str
    rent: float
    type: str
    images: list[str] = []
    amenities: list[str] = []
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    average_rating: float = 0.0
    total_reviews: int = 0
