"""Registration form client: replays the two-step sign-up a browser form
performs (register, then complete the profile) against a running server.

Usage: python -m scripts.form_client [--count 5] [--base-url http://localhost:8000]
"""
import argparse
import asyncio
import random
import sys
import uuid
from typing import Any

import httpx


DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_COUNT = 5

AREAS = ["Dhanmondi", "Gulshan", "Banani", "Uttara", "Mirpur", "Mohammadpur"]
PROFESSIONS = ["Software Engineer", "Student", "Doctor", "Designer", "Banker"]
LANGUAGES = ["Bangla", "English", "Hindi", "Urdu"]
INTERESTS = ["cooking", "football", "reading", "music", "gaming", "travel"]


def random_completion() -> dict[str, Any]:
    """Body of the profile-completion step, as the form submits it."""
    budget_min = random.choice([5000, 8000, 10000, 12000, 15000])
    return {
        "gender": random.choice(["Male", "Female"]),
        "age": random.randint(18, 40),
        "profession": random.choice(PROFESSIONS),
        "occupation": random.choice(["Student", "Working Professional", "Freelancer"]),
        "bio": "Tidy, friendly and easy to live with.",
        "budgetMin": budget_min,
        "budgetMax": budget_min + random.choice([3000, 5000, 10000]),
        "lookingFor": random.choice(["Room", "Roommate", "Both"]),
        "habits": {
            "smoking": random.choice(["Yes", "No", "Occasionally"]),
            "drinking": random.choice(["Yes", "No", "Socially"]),
            "pets": random.choice(["Have pets", "No pets", "Pet-friendly"]),
            "cleanliness": random.choice(["Very clean", "Moderate", "Relaxed"]),
            "nightOwl": random.random() < 0.5,
            "guests": random.choice(["Frequently", "Sometimes", "Rarely", "Never"]),
        },
        "preferredLocations": [
            {"area": area, "city": "Dhaka"} for area in random.sample(AREAS, 2)
        ],
        "languages": random.sample(LANGUAGES, 2),
        "interests": random.sample(INTERESTS, 3),
    }


async def submit_form(
    client: httpx.AsyncClient, base_url: str, index: int
) -> dict[str, Any] | None:
    """Register one user and complete their profile; return the profile."""
    account = {
        "name": f"Form User {index}",
        "email": f"form_{index}_{uuid.uuid4().hex[:8]}@example.com",
        "password": uuid.uuid4().hex,
    }
    resp = await client.post(f"{base_url}/api/auth/register", json=account)
    if resp.status_code != 201:
        print(f"  [WARN] Register {index}: status {resp.status_code} {resp.text}")
        return None
    user_id = resp.json()["data"]["user"]["id"]

    resp = await client.post(
        f"{base_url}/api/profiles/{user_id}/complete", json=random_completion()
    )
    if resp.status_code != 200:
        print(f"  [WARN] Complete {index}: status {resp.status_code} {resp.text}")
        return None
    return resp.json()["data"]


async def run(count: int, base_url: str) -> int:
    async with httpx.AsyncClient(timeout=30.0) as client:
        profiles = await asyncio.gather(
            *(submit_form(client, base_url, i) for i in range(count))
        )

    completed = [p for p in profiles if p is not None and p["isProfileComplete"]]
    print(f"Submitted {count} forms; {len(completed)} profiles complete.")
    return 0 if len(completed) == count else 1


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT)
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args.count, args.base_url)))


if __name__ == "__main__":
    main()
