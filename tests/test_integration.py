"""End-to-end API tests through the ASGI app.

Each test runs against a fresh in-memory database; the app's ``get_db``
dependency is overridden to use it.
"""
import uuid

import pytest

ALICE = {"name": "Alice", "email": "alice@example.com", "password": "secret123"}

ALICE_COMPLETION = {
    "gender": "Female",
    "profession": "Designer",
    "budgetMin": 10000,
    "budgetMax": 15000,
    "preferredLocations": [{"area": "Dhanmondi", "city": "Dhaka"}],
    "habits": {"smoking": "No", "cleanliness": "Very clean"},
    "languages": ["Bangla"],
    "interests": ["cooking"],
}


async def _register(client, body=ALICE):
    response = await client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


class TestMeta:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_index(self, client):
        body = (await client.get("/")).json()
        assert body["success"] is True
        assert body["endpoints"]["profiles"] == "/api/profiles"

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route not found"}


class TestRegistrationForm:
    """Register -> complete profile, the way the registration form calls it."""

    @pytest.mark.asyncio
    async def test_register_then_complete(self, client):
        data = await _register(client)
        user = data["user"]
        assert data["token"]
        assert user["isProfileComplete"] is False
        assert "passwordHash" not in user

        response = await client.post(
            f"/api/profiles/{user['id']}/complete", json=ALICE_COMPLETION
        )
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["success"] is True
        profile = body["data"]
        assert profile["isProfileComplete"] is True
        assert profile["budgetMin"] == 10000
        details = profile["profileDetails"]
        assert details["preferredLocations"][0]["area"] == "Dhanmondi"
        assert details["habits"]["cleanliness"] == "Very clean"
        assert details["habits"]["guests"] == "Sometimes"

        response = await client.put(f"/api/profiles/{user['id']}", json={"bio": "Early riser"})
        profile = response.json()["data"]
        assert profile["bio"] == "Early riser"
        assert profile["isProfileComplete"] is True
        assert profile["profileDetails"]["preferredLocations"][0]["area"] == "Dhanmondi"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client):
        await _register(client)
        response = await client.post("/api/auth/register", json=ALICE)
        assert response.status_code == 409
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_invalid_enum_is_bad_request(self, client):
        user = (await _register(client))["user"]
        response = await client.post(
            f"/api/profiles/{user['id']}/complete",
            json={**ALICE_COMPLETION, "gender": "Robot"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "gender" in body["error"]

    @pytest.mark.asyncio
    async def test_login(self, client):
        await _register(client)
        response = await client.post(
            "/api/auth/login", json={"email": "ALICE@example.com", "password": "secret123"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["token"]

        response = await client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "nope"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_profile(self, client):
        response = await client.get(f"/api/profiles/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_malformed_id(self, client):
        response = await client.get("/api/profiles/not-a-uuid")
        assert response.status_code == 400


class TestProfileSearch:

    @pytest.mark.asyncio
    async def test_filtered_search_envelope(self, client):
        alice = (await _register(client))["user"]
        await client.post(f"/api/profiles/{alice['id']}/complete", json=ALICE_COMPLETION)
        await _register(client, {"name": "Bob", "email": "bob@example.com", "password": "secret123"})

        response = await client.get(
            "/api/profiles",
            params={"location": "dhan", "minBudget": "12000", "gender": "", "limit": "5"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 1
        assert body["count"] == 1
        assert body["pagination"] == {"page": 1, "limit": 5, "pages": 1}
        assert body["data"][0]["id"] == alice["id"]

    @pytest.mark.asyncio
    async def test_bad_limit(self, client):
        response = await client.get("/api/profiles", params={"limit": "1000"})
        assert response.status_code == 400


class TestListingsReviewsFavorites:

    @pytest.mark.asyncio
    async def test_full_flow(self, client):
        owner = await _register(client)
        guest = await _register(
            client, {"name": "Bob", "email": "bob@example.com", "password": "secret123"}
        )

        listing_body = {
            "title": "Bright room",
            "location": "Gulshan, Dhaka",
            "rent": 15000,
            "type": "Room",
        }
        assert (await client.post("/api/listings", json=listing_body)).status_code == 401

        response = await client.post(
            "/api/listings", json=listing_body, headers=_auth(owner["token"])
        )
        assert response.status_code == 201, response.text
        listing = response.json()["data"]
        assert listing["owner"]["name"] == "Alice"
        listing_id = listing["id"]

        review = {"listingId": listing_id, "rating": 4, "comment": "Great light"}
        response = await client.post("/api/reviews", json=review, headers=_auth(guest["token"]))
        assert response.status_code == 201
        review_id = response.json()["data"]["id"]

        response = await client.post("/api/reviews", json=review, headers=_auth(guest["token"]))
        assert response.status_code == 409

        response = await client.put(
            f"/api/reviews/{review_id}", json={"rating": 1}, headers=_auth(owner["token"])
        )
        assert response.status_code == 403

        response = await client.put(
            f"/api/reviews/{review_id}",
            json={"rating": 5, "comment": "Even better"},
            headers=_auth(guest["token"]),
        )
        assert response.status_code == 200
        assert response.json()["data"]["rating"] == 5
        assert response.json()["data"]["comment"] == "Even better"

        detail = (await client.get(f"/api/listings/{listing_id}")).json()["data"]
        assert detail["averageRating"] == 5.0
        assert detail["totalReviews"] == 1
        assert detail["reviews"][0]["comment"] == "Even better"

        page = (await client.get("/api/listings", params={"location": "gulshan"})).json()
        assert page["total"] == 1
        assert "reviews" not in page["data"][0]

        per_listing = (await client.get(f"/api/reviews/listing/{listing_id}")).json()["data"]
        assert per_listing["totalReviews"] == 1

        mine = (await client.get("/api/reviews/my-reviews", headers=_auth(guest["token"]))).json()
        assert mine["data"][0]["listing"]["title"] == "Bright room"

        headers = _auth(guest["token"])
        response = await client.post("/api/favorites", json={"listingId": listing_id}, headers=headers)
        assert response.status_code == 201
        response = await client.post("/api/favorites", json={"listingId": listing_id}, headers=headers)
        assert response.status_code == 409

        check = (await client.get(f"/api/favorites/check/{listing_id}", headers=headers)).json()
        assert check == {"success": True, "isFavorited": True}
        count = (await client.get("/api/favorites/count", headers=headers)).json()
        assert count == {"success": True, "count": 1}
        favorites = (await client.get("/api/favorites", headers=headers)).json()
        assert favorites["total"] == 1
        assert favorites["data"][0]["listing"]["averageRating"] == 5.0

        response = await client.delete(f"/api/favorites/{listing_id}", headers=headers)
        assert response.json() == {"success": True, "message": "Removed from favorites"}

        response = await client.delete(f"/api/reviews/{review_id}", headers=headers)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_favorite_without_listing_id(self, client):
        user = await _register(client)
        response = await client.post("/api/favorites", json={}, headers=_auth(user["token"]))
        assert response.status_code == 400
        assert response.json()["message"] == "Listing ID is required"


class TestListingSearch:

    @pytest.mark.asyncio
    async def test_without_paging_returns_every_listing(self, client):
        owner = await _register(client)
        headers = _auth(owner["token"])
        for i in range(15):
            body = {"title": f"Room {i}", "location": "Mirpur", "rent": 9000 + i, "type": "Room"}
            response = await client.post("/api/listings", json=body, headers=headers)
            assert response.status_code == 201

        body = (await client.get("/api/listings")).json()
        assert body["total"] == 15
        assert body["count"] == 15
        assert len(body["data"]) == 15
        assert body["pagination"] is None

        body = (await client.get("/api/listings", params={"page": "2", "limit": "10"})).json()
        assert body["total"] == 15
        assert body["count"] == 5
        assert body["pagination"] == {"page": 2, "limit": 10, "pages": 2}
