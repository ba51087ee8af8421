"""
RoomEase — Listings API
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.auth import get_current_user_id
from roomease.database import get_db
from roomease.schemas.common import Envelope, PageEnvelope, Pagination
from roomease.schemas.listing import ListingCreate, ListingResponse
from roomease.schemas.review import ListingDetailResponse
from roomease.services import search_service
from roomease.services.listing_service import ListingService
from roomease.services.search_service import ListingCriteria

logger = structlog.get_logger("roomease.api.listings")

router = APIRouter()


# ──────────────────────────────────────────────────────────────────────────────
# POST "" — Create a listing owned by the caller
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=Envelope[ListingResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a listing",
)
async def create_listing(
    payload: ListingCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> Envelope[ListingResponse]:
    listing = await ListingService(db).create_listing(user_id, payload)
    return Envelope(message="Listing created successfully", data=listing)


# ──────────────────────────────────────────────────────────────────────────────
# GET "" — Filtered listing search, paginated on request
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=PageEnvelope[ListingResponse],
    summary="Search listings",
)
async def list_listings(
    location: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    min_rent: Optional[str] = Query(None, alias="minRent"),
    max_rent: Optional[str] = Query(None, alias="maxRent"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PageEnvelope[ListingResponse]:
    """Active listings matching every supplied criterion, newest first,
    each with its owner and rating aggregate.

    Every match is returned unless ``page`` or ``limit`` is supplied; only
    then is the result paginated."""
    criteria = ListingCriteria.from_query(
        location=location, type=type, min_rent=min_rent, max_rent=max_rent
    )
    pagination = None
    if search_service.wants_page(page, limit):
        page_no, size = search_service.resolve_page(page, limit)
        result = await search_service.list_listings(db, criteria, page_no, size)
        pagination = Pagination(page=result.page, limit=size, pages=result.pages)
    else:
        result = await search_service.list_listings(db, criteria)

    return PageEnvelope(
        count=len(result.items),
        total=result.total,
        pagination=pagination,
        data=await ListingService(db).present_listings(result.items),
    )


# ──────────────────────────────────────────────────────────────────────────────
# GET /{listing_id} — Single listing with reviews
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/{listing_id}",
    response_model=Envelope[ListingDetailResponse],
    summary="Get a listing",
)
async def get_listing(
    listing_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Envelope[ListingDetailResponse]:
    return Envelope(data=await ListingService(db).get_listing(listing_id))
