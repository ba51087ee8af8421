"""Shared pytest fixtures for RoomEase tests."""
import os
import uuid
from datetime import datetime, timedelta, timezone

from cryptography.fernet import Fernet

# Settings are read on first import of roomease.config.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TOKEN_SECRET", Fernet.generate_key().decode())
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import roomease.models  # noqa: F401
from roomease.database import Base, get_db
from roomease.models.listing import Listing
from roomease.models.profile import PreferredLocation, ProfileDetails
from roomease.models.user import User

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    from roomease.main import app

    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ──────────────────────────────────────────────────────────────────────────────
# Record builders (direct ORM inserts, no password hashing)
# ──────────────────────────────────────────────────────────────────────────────

async def add_user(
    db,
    name,
    *,
    minutes=0,
    gender="Female",
    profession="Engineer",
    budget_min=None,
    budget_max=None,
    looking_for="Both",
    areas=(),
    is_active=True,
):
    """Insert a user created ``minutes`` after BASE_TIME."""
    details = None
    if areas:
        details = ProfileDetails(
            preferred_locations=[
                PreferredLocation(position=i, area=area, city="Dhaka")
                for i, area in enumerate(areas)
            ]
        )
    user = User(
        email=f"{name.lower()}-{uuid.uuid4().hex[:6]}@example.com",
        password_hash="unused",
        name=name,
        gender=gender,
        profession=profession,
        budget_min=budget_min,
        budget_max=budget_max,
        looking_for=looking_for,
        is_active=is_active,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        details=details,
    )
    db.add(user)
    await db.flush()
    return user


async def add_listing(
    db,
    title="Sunny room",
    *,
    owner_id=None,
    location="Dhanmondi, Dhaka",
    rent=12000.0,
    type="Room",
    minutes=0,
    is_active=True,
):
    listing = Listing(
        user_id=owner_id or uuid.uuid4(),
        title=title,
        description="Close to the lake",
        location=location,
        rent=rent,
        type=type,
        images=["https://img.example.com/1.jpg"],
        amenities=["wifi"],
        is_active=is_active,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db.add(listing)
    await db.flush()
    return listing


@pytest.fixture
def make_user(db):
    async def _make(name, **kwargs):
        return await add_user(db, name, **kwargs)
    return _make


@pytest.fixture
def make_listing(db):
    async def _make(title="Sunny room", **kwargs):
        return await add_listing(db, title, **kwargs)
    return _make


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def other_user_id():
    return uuid.uuid4()
