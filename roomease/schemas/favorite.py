from datetime import datetime
from typing import Optional
from uuid import UUID

from roomease.schemas.common import RequestModel, ResponseModel
from roomease.schemas.listing import ListingResponse


class FavoriteCreate(RequestModel):
    listing_id: Optional[UUID] = None


class FavoriteResponse(ResponseModel):
    id: UUID
    user_id: UUID
    listing_id: UUID
    listing: Optional[ListingResponse] = None
    created_at: datetime


# ── Envelopes with favorite-specific shapes ──────────────────────────────────

class FavoriteList(ResponseModel):
    success: bool = True
    total: int
    data: list[FavoriteResponse]


class FavoriteCheck(ResponseModel):
    success: bool = True
    is_favorited: bool


class FavoriteCount(ResponseModel):
    success: bool = True
    count: int
