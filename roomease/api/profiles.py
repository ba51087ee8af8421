"""
RoomEase — Profiles API

Public profile CRUD, the registration completion step, and the filtered
profile search.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.database import get_db
from roomease.schemas.common import Envelope, MessageEnvelope, PageEnvelope, Pagination
from roomease.schemas.profile import ProfileComplete, ProfileResponse, ProfileUpdate
from roomease.services import search_service
from roomease.services.profile_service import ProfileService
from roomease.services.search_service import ProfileCriteria

logger = structlog.get_logger("roomease.api.profiles")

router = APIRouter()


# ──────────────────────────────────────────────────────────────────────────────
# GET "" — Filtered, paginated profile search
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=PageEnvelope[ProfileResponse],
    summary="Search profiles",
)
async def list_profiles(
    gender: Optional[str] = Query(None),
    min_budget: Optional[str] = Query(None, alias="minBudget"),
    max_budget: Optional[str] = Query(None, alias="maxBudget"),
    location: Optional[str] = Query(None, description="Substring of a preferred area"),
    profession: Optional[str] = Query(None),
    looking_for: Optional[str] = Query(None, alias="lookingFor"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PageEnvelope[ProfileResponse]:
    """Return active profiles matching every supplied criterion, newest
    first.  Blank parameters are ignored."""
    criteria = ProfileCriteria.from_query(
        gender=gender,
        profession=profession,
        location=location,
        looking_for=looking_for,
        min_budget=min_budget,
        max_budget=max_budget,
    )
    page_no, size = search_service.resolve_page(page, limit)
    result = await search_service.list_profiles(db, criteria, page_no, size)

    return PageEnvelope(
        count=len(result.items),
        total=result.total,
        pagination=Pagination(page=result.page, limit=result.limit, pages=result.pages),
        data=[ProfileResponse.model_validate(user) for user in result.items],
    )


# ──────────────────────────────────────────────────────────────────────────────
# GET /{user_id} — Single profile
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/{user_id}",
    response_model=Envelope[ProfileResponse],
    summary="Get a profile",
)
async def get_profile(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Envelope[ProfileResponse]:
    user = await ProfileService(db).get_profile(user_id)
    return Envelope(data=ProfileResponse.model_validate(user))


# ──────────────────────────────────────────────────────────────────────────────
# PUT /{user_id} — Partial update
# ──────────────────────────────────────────────────────────────────────────────

@router.put(
    "/{user_id}",
    response_model=Envelope[ProfileResponse],
    summary="Update a profile",
)
async def update_profile(
    user_id: uuid.UUID,
    payload: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
) -> Envelope[ProfileResponse]:
    """Only fields present in the body with a non-blank value are applied."""
    user = await ProfileService(db).update_profile(user_id, payload)
    return Envelope(
        message="Profile updated successfully",
        data=ProfileResponse.model_validate(user),
    )


# ──────────────────────────────────────────────────────────────────────────────
# POST /{user_id}/complete — Second registration step
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/{user_id}/complete",
    response_model=Envelope[ProfileResponse],
    summary="Complete a profile",
)
async def complete_profile(
    user_id: uuid.UUID,
    payload: ProfileComplete,
    db: AsyncSession = Depends(get_db),
) -> Envelope[ProfileResponse]:
    user = await ProfileService(db).complete_profile(user_id, payload)
    return Envelope(
        message="Profile completed successfully",
        data=ProfileResponse.model_validate(user),
    )


# ──────────────────────────────────────────────────────────────────────────────
# POST /{user_id}/deactivate — Soft delete
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/{user_id}/deactivate",
    response_model=Envelope[ProfileResponse],
    summary="Deactivate a profile",
)
async def deactivate_profile(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Envelope[ProfileResponse]:
    user = await ProfileService(db).deactivate_profile(user_id)
    return Envelope(
        message="Profile deactivated",
        data=ProfileResponse.model_validate(user),
    )


# ──────────────────────────────────────────────────────────────────────────────
# DELETE /{user_id} — Hard delete
# ──────────────────────────────────────────────────────────────────────────────

@router.delete(
    "/{user_id}",
    response_model=MessageEnvelope,
    summary="Delete a profile",
)
async def delete_profile(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> MessageEnvelope:
    await ProfileService(db).delete_profile(user_id)
    return MessageEnvelope(message="Profile deleted successfully")
