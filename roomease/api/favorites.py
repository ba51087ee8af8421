"""
RoomEase — Favorites API

Every route acts on the caller's own favorites.
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.auth import get_current_user_id
from roomease.database import get_db
from roomease.schemas.common import Envelope, MessageEnvelope
from roomease.schemas.favorite import (
    FavoriteCheck,
    FavoriteCount,
    FavoriteCreate,
    FavoriteList,
    FavoriteResponse,
)
from roomease.services.favorite_service import FavoriteService

logger = structlog.get_logger("roomease.api.favorites")

router = APIRouter()


@router.post(
    "",
    response_model=Envelope[FavoriteResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add a listing to favorites",
)
async def add_favorite(
    payload: FavoriteCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> Envelope[FavoriteResponse]:
    favorite = await FavoriteService(db).add_favorite(user_id, payload.listing_id)
    return Envelope(message="Added to favorites", data=favorite)


@router.get(
    "",
    response_model=FavoriteList,
    summary="List my favorites",
)
async def list_favorites(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> FavoriteList:
    favorites = await FavoriteService(db).list_favorites(user_id)
    return FavoriteList(total=len(favorites), data=favorites)


@router.get(
    "/count",
    response_model=FavoriteCount,
    summary="Count my favorites",
)
async def count_favorites(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> FavoriteCount:
    return FavoriteCount(count=await FavoriteService(db).count_favorites(user_id))


@router.get(
    "/check/{listing_id}",
    response_model=FavoriteCheck,
    summary="Check whether a listing is a favorite",
)
async def check_favorite(
    listing_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> FavoriteCheck:
    return FavoriteCheck(
        is_favorited=await FavoriteService(db).is_favorited(user_id, listing_id)
    )


@router.delete(
    "/{listing_id}",
    response_model=MessageEnvelope,
    summary="Remove a listing from favorites",
)
async def remove_favorite(
    listing_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> MessageEnvelope:
    await FavoriteService(db).remove_favorite(user_id, listing_id)
    return MessageEnvelope(message="Removed from favorites")
