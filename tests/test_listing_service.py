"""Tests for listing creation, detail reads and owner resolution."""
import uuid

import pytest

from roomease.errors import NotFound
from roomease.models.review import Review
from roomease.schemas.listing import ListingCreate
from roomease.services.listing_service import ListingService


@pytest.fixture
def service(db):
    return ListingService(db)


class TestListings:

    @pytest.mark.asyncio
    async def test_create_resolves_owner(self, service, make_user):
        owner = await make_user("Owner")
        payload = ListingCreate.model_validate(
            {
                "title": "Room near campus",
                "location": "Mohammadpur, Dhaka",
                "rent": 8000,
                "type": "Room",
                "amenities": ["wifi", "balcony"],
            }
        )

        listing = await service.create_listing(owner.id, payload)

        assert listing.owner is not None
        assert listing.owner.name == "Owner"
        assert listing.is_active is True
        assert listing.average_rating == 0.0
        assert listing.total_reviews == 0
        assert listing.images == []

    @pytest.mark.asyncio
    async def test_orphaned_owner_resolves_to_none(self, service, make_listing):
        listing = await make_listing(owner_id=uuid.uuid4())
        detail = await service.get_listing(listing.id)
        assert detail.owner is None

    @pytest.mark.asyncio
    async def test_detail_includes_reviews_and_aggregate(self, db, service, make_listing):
        listing = await make_listing()
        for rating in (5, 3, 4):
            db.add(Review(listing_id=listing.id, user_id=uuid.uuid4(), rating=rating, comment="fine"))
        await db.flush()

        detail = await service.get_listing(listing.id)

        assert detail.average_rating == 4.0
        assert detail.total_reviews == 3
        assert sorted(r.rating for r in detail.reviews) == [3, 4, 5]

    @pytest.mark.asyncio
    async def test_collection_exposes_aggregate_only(self, db, service, make_listing):
        listing = await make_listing()
        db.add(Review(listing_id=listing.id, user_id=uuid.uuid4(), rating=2, comment="meh"))
        await db.flush()

        [presented] = await service.present_listings([listing])

        assert presented.average_rating == 2.0
        assert "reviews" not in presented.model_dump()

    @pytest.mark.asyncio
    async def test_unknown_listing(self, service):
        with pytest.raises(NotFound):
            await service.get_listing(uuid.uuid4())
