"""
RoomEase — Favorites
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.errors import NotFound
from roomease.models.listing import Listing
from roomease.models.review import Favorite
from roomease.schemas.favorite import FavoriteResponse
from roomease.services.guards import UniquenessGuard
from roomease.services.listing_service import ListingService
from roomease.store import RecordStore

logger = structlog.get_logger("roomease.favorite_service")


class FavoriteService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.favorites = RecordStore(db, Favorite)
        self.listings = RecordStore(db, Listing)
        self.guard = UniquenessGuard(db)
        self.presenter = ListingService(db)

    async def add_favorite(
        self,
        user_id: uuid.UUID,
        listing_id: uuid.UUID | None,
    ) -> FavoriteResponse:
        log = logger.bind(user_id=str(user_id), listing_id=str(listing_id))
        log.info("add_favorite_start")

        listing = await self.guard.check_new_favorite(user_id, listing_id)
        favorite = Favorite(user_id=user_id, listing_id=listing.id)
        await self.favorites.create(favorite)

        log.info("add_favorite_complete", favorite_id=str(favorite.id))
        [response] = await self._present([favorite], {listing.id: listing})
        return response

    async def list_favorites(self, user_id: uuid.UUID) -> list[FavoriteResponse]:
        """The user's favorites, newest first, each with its listing."""
        favorites = await self.favorites.find_all(
            Favorite.user_id == user_id,
            order_by=(Favorite.created_at.desc(), Favorite.id.desc()),
        )
        if not favorites:
            return []
        listings = await self.listings.find_all(
            Listing.id.in_(list({favorite.listing_id for favorite in favorites}))
        )
        return await self._present(favorites, {listing.id: listing for listing in listings})

    async def remove_favorite(self, user_id: uuid.UUID, listing_id: uuid.UUID) -> None:
        favorite = await self.favorites.find_one(
            Favorite.user_id == user_id, Favorite.listing_id == listing_id
        )
        if favorite is None:
            raise NotFound("Favorite not found")
        await self.favorites.delete(favorite.id)
        logger.info(
            "remove_favorite_complete", user_id=str(user_id), listing_id=str(listing_id)
        )

    async def is_favorited(self, user_id: uuid.UUID, listing_id: uuid.UUID) -> bool:
        favorite = await self.favorites.find_one(
            Favorite.user_id == user_id, Favorite.listing_id == listing_id
        )
        return favorite is not None

    async def count_favorites(self, user_id: uuid.UUID) -> int:
        return await self.favorites.count(Favorite.user_id == user_id)

    async def _present(
        self,
        favorites: list[Favorite],
        listings: dict[uuid.UUID, Listing],
    ) -> list[FavoriteResponse]:
        presented = {
            listing.id: listing_response
            for listing, listing_response in zip(
                listings.values(),
                await self.presenter.present_listings(list(listings.values())),
            )
        }
        return [
            FavoriteResponse.model_validate(favorite).model_copy(
                update={"listing": presented.get(favorite.listing_id)}
            )
            for favorite in favorites
        ]
