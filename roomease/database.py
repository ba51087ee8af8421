"""
RoomEase — Async Database Engine & Session Factory

Builds a single async engine from ``DATABASE_URL``:

* **PostgreSQL** (production) – a plain ``postgresql://`` URL is upgraded to
  the ``asyncpg`` dialect and the shared pool tuning parameters apply.
* **SQLite** (local development, tests) – ``sqlite+aiosqlite://`` URLs are
  accepted as-is; SQLite pools take no sizing arguments.

Exposes the ``get_db`` async generator for FastAPI dependency injection.  One
session is one unit of work: it is committed when the request handler returns
and rolled back if it raises.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from roomease.config import get_settings

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------ #
# Declarative base for all ORM models
# ------------------------------------------------------------------ #

class Base(DeclarativeBase):
    """Shared declarative base.

    Every SQLAlchemy model in the project should inherit from this class::

        from roomease.database import Base

        class Listing(Base):
            __tablename__ = "listings"
            ...
    """
    pass


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp used as the client-side column default."""
    return datetime.now(timezone.utc)


# ------------------------------------------------------------------ #
# Pool configuration (server databases only)
# ------------------------------------------------------------------ #

_POOL_KWARGS = {
    "pool_size": 10,
    "max_overflow": 5,
    "pool_timeout": 30,
    "pool_recycle": 1800,
    "pool_pre_ping": True,
}


# ------------------------------------------------------------------ #
# Engine construction helpers
# ------------------------------------------------------------------ #

def normalise_database_url(url: str) -> str:
    """Transparently upgrade a plain ``postgresql://`` scheme so that
    developers do not need to remember the asyncpg dialect prefix."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def migration_url(url: str) -> str:
    """``normalise_database_url`` escaped for an alembic ini option, where
    configparser would otherwise interpolate ``%``."""
    return normalise_database_url(url).replace("%", "%%")


def _create_engine() -> AsyncEngine:
    """Create the async engine from the configured ``DATABASE_URL``."""
    settings = get_settings()
    url = normalise_database_url(settings.DATABASE_URL)

    pool_kwargs = {} if url.startswith("sqlite") else _POOL_KWARGS

    engine = create_async_engine(
        url,
        echo=settings.DB_ECHO,
        **pool_kwargs,
    )

    logger.info("Database engine created (%s)", engine.url.get_backend_name())
    return engine


# ------------------------------------------------------------------ #
# Module-level engine & session factory
# ------------------------------------------------------------------ #

engine = _create_engine()

async_session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ------------------------------------------------------------------ #
# FastAPI dependency
# ------------------------------------------------------------------ #

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an ``AsyncSession`` and ensure it is closed afterwards.

    Usage in a FastAPI route::

        from fastapi import Depends
        from roomease.database import get_db

        @router.get("/listings")
        async def list_listings(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
