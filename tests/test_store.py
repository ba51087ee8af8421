"""Tests for the generic store adapter."""
import uuid

import pytest

from roomease.errors import Conflict
from roomease.models.listing import Listing
from roomease.models.review import Favorite
from roomease.models.user import User
from roomease.store import RecordStore


class TestRecordStore:

    @pytest.mark.asyncio
    async def test_crud(self, db, make_listing):
        store = RecordStore(db, Listing)
        listing = await make_listing("Original")

        assert (await store.get(listing.id)).title == "Original"

        updated = await store.update(listing.id, {"title": "Renamed"})
        assert updated.title == "Renamed"
        assert await store.update(uuid.uuid4(), {"title": "x"}) is None

        assert await store.delete(listing.id) is True
        assert await store.get(listing.id) is None
        assert await store.delete(listing.id) is False

    @pytest.mark.asyncio
    async def test_find_page_counts_all_matches(self, db, make_listing):
        for i in range(5):
            await make_listing(f"L{i}", minutes=i, type="Room" if i % 2 else "Flat")

        store = RecordStore(db, Listing)
        rows, total = await store.find_page(
            Listing.type == "Flat",
            skip=1,
            limit=1,
            order_by=(Listing.created_at.desc(),),
        )

        assert total == 3
        assert [r.title for r in rows] == ["L2"]

    @pytest.mark.asyncio
    async def test_upsert(self, db, make_listing, user_id):
        listing = await make_listing()
        store = RecordStore(db, Favorite)
        condition = (Favorite.user_id == user_id, Favorite.listing_id == listing.id)

        created = await store.upsert(
            *condition, values={}, defaults={"user_id": user_id, "listing_id": listing.id}
        )
        again = await store.upsert(*condition, values={})

        assert created.id == again.id
        assert await store.count(Favorite.user_id == user_id) == 1

    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(self, db):
        store = RecordStore(db, User)
        await store.create(User(email="dup@example.com", password_hash="x", name="One"))
        with pytest.raises(Conflict):
            await store.create(User(email="dup@example.com", password_hash="x", name="Two"))
