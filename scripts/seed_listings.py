"""Seed demo owners and listings.  Safe to re-run: existing emails and
listing titles are skipped."""
import asyncio
import sys
sys.path.insert(0, ".")

from sqlalchemy import select

from roomease.database import async_session_factory
from roomease.models.listing import Listing
from roomease.models.profile import PreferredLocation, ProfileDetails
from roomease.models.user import User
from roomease.services.profile_service import is_profile_complete
from roomease.utils.security import hash_password

DEMO_PASSWORD = "roomease-demo"

DEMO_OWNERS = [
    {
        "email": "rahim.owner@example.com",
        "name": "Rahim Uddin",
        "gender": "Male",
        "profession": "Landlord",
        "budget_min": 8000,
        "budget_max": 20000,
        "looking_for": "Roommate",
        "areas": ["Dhanmondi"],
    },
    {
        "email": "farzana.owner@example.com",
        "name": "Farzana Akter",
        "gender": "Female",
        "profession": "Architect",
        "budget_min": 12000,
        "budget_max": 30000,
        "looking_for": "Roommate",
        "areas": ["Gulshan", "Banani"],
    },
]

DEMO_LISTINGS = [
    {
        "owner": "rahim.owner@example.com",
        "title": "Furnished room near Dhanmondi Lake",
        "description": "Quiet shared flat, two minutes from the lake. Female or male.",
        "location": "Dhanmondi, Dhaka",
        "rent": 12000,
        "type": "Room",
        "amenities": ["wifi", "furnished", "gas"],
    },
    {
        "owner": "rahim.owner@example.com",
        "title": "Seat in student mess",
        "description": "Walking distance to the university; meals available.",
        "location": "Mohammadpur, Dhaka",
        "rent": 5500,
        "type": "Shared",
        "amenities": ["meals", "wifi"],
    },
    {
        "owner": "farzana.owner@example.com",
        "title": "Two-bed apartment with balcony",
        "description": "Looking for one flatmate; lift, generator and security.",
        "location": "Banani, Dhaka",
        "rent": 28000,
        "type": "Apartment",
        "amenities": ["lift", "generator", "security", "balcony"],
    },
]


async def _owner(session, entry: dict) -> User:
    result = await session.execute(select(User).where(User.email == entry["email"]))
    user = result.scalar_one_or_none()
    if user is not None:
        print(f"  Owner {entry['email']} already exists, skipping.")
        return user

    user = User(
        email=entry["email"],
        password_hash=hash_password(DEMO_PASSWORD),
        name=entry["name"],
        gender=entry["gender"],
        profession=entry["profession"],
        budget_min=entry["budget_min"],
        budget_max=entry["budget_max"],
        looking_for=entry["looking_for"],
        details=ProfileDetails(
            languages=["Bangla", "English"],
            preferred_locations=[
                PreferredLocation(position=i, area=area, city="Dhaka")
                for i, area in enumerate(entry["areas"])
            ],
        ),
    )
    user.is_profile_complete = is_profile_complete(user)
    session.add(user)
    await session.flush()
    print(f"  Seeded owner {entry['email']}")
    return user


async def seed():
    async with async_session_factory() as session:
        owners = {entry["email"]: await _owner(session, entry) for entry in DEMO_OWNERS}

        for entry in DEMO_LISTINGS:
            owner = owners[entry["owner"]]
            existing = await session.execute(
                select(Listing).where(
                    Listing.user_id == owner.id, Listing.title == entry["title"]
                )
            )
            if existing.scalar_one_or_none() is None:
                fields = {k: v for k, v in entry.items() if k != "owner"}
                session.add(Listing(user_id=owner.id, images=[], **fields))
                print(f"  Seeded listing {entry['title']!r}")
            else:
                print(f"  Listing {entry['title']!r} already exists, skipping.")
        await session.commit()
    print("Done seeding listings.")


if __name__ == "__main__":
    asyncio.run(seed())
