"""
RoomEase — Store adapter.

A thin, generic async facade over one ORM model bound to an ``AsyncSession``.
Services talk to the database through ``RecordStore`` so that every write is
flushed eagerly (uniqueness violations surface inside the service call, not at
commit time) and every driver error is translated into the service error
taxonomy:

* ``IntegrityError``  -> ``Conflict`` (unique constraint on the key or pair)
* ``SQLAlchemyError`` -> ``Internal`` with the driver diagnostic attached

Nothing is retried; the caller decides whether to try again.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Generic, Iterator, Mapping, Sequence, TypeVar

import structlog
from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.database import Base
from roomease.errors import Conflict, Internal

logger = structlog.get_logger("roomease.store")

ModelT = TypeVar("ModelT", bound=Base)


@contextmanager
def translate_store_errors(label: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as service errors."""
    try:
        yield
    except IntegrityError as exc:
        logger.warning("store_integrity_error", record=label, error=str(exc.orig))
        raise Conflict(f"{label} already exists", error=str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        logger.error("store_failure", record=label, error=str(exc))
        raise Internal("Database error", error=str(exc)) from exc


class RecordStore(Generic[ModelT]):
    """CRUD + paginated search over a single mapped model.

    ``conditions`` are SQLAlchemy boolean expressions built by the caller
    (see ``roomease.services.search_service``); an empty sequence matches
    every row.
    """

    def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
        self.session = session
        self.model = model
        self.label = model.__name__

    # ── Reads ────────────────────────────────────────────────────────────

    async def get(self, key: uuid.UUID) -> ModelT | None:
        with translate_store_errors(self.label):
            return await self.session.get(self.model, key)

    async def find_one(self, *conditions: ColumnElement[bool]) -> ModelT | None:
        stmt = select(self.model).where(*conditions).limit(1)
        with translate_store_errors(self.label):
            result = await self.session.execute(stmt)
            return result.scalars().first()

    async def find_all(
        self,
        *conditions: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> list[ModelT]:
        stmt = select(self.model).where(*conditions).order_by(*order_by)
        with translate_store_errors(self.label):
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def count(self, *conditions: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*conditions)
        with translate_store_errors(self.label):
            result = await self.session.execute(stmt)
            return int(result.scalar_one())

    async def find_page(
        self,
        *conditions: ColumnElement[bool],
        skip: int = 0,
        limit: int | None = None,
        order_by: Sequence[Any] = (),
    ) -> tuple[list[ModelT], int]:
        """Return ``(rows, total)`` where ``total`` ignores skip/limit.

        A ``limit`` of ``None`` returns every row from ``skip`` on."""
        total = await self.count(*conditions)
        stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(*order_by)
            .offset(skip)
            .limit(limit)
        )
        with translate_store_errors(self.label):
            result = await self.session.execute(stmt)
            rows = list(result.scalars().all())
        return rows, total

    # ── Writes ───────────────────────────────────────────────────────────

    async def create(self, record: ModelT) -> ModelT:
        with translate_store_errors(self.label):
            self.session.add(record)
            await self.session.flush()
        return record

    async def update(self, key: uuid.UUID, values: Mapping[str, Any]) -> ModelT | None:
        record = await self.get(key)
        if record is None:
            return None
        return await self.apply(record, values)

    async def apply(self, record: ModelT, values: Mapping[str, Any]) -> ModelT:
        """Write ``values`` onto an already loaded record and flush."""
        for field, value in values.items():
            setattr(record, field, value)
        with translate_store_errors(self.label):
            await self.session.flush()
        return record

    async def delete(self, key: uuid.UUID) -> bool:
        record = await self.get(key)
        if record is None:
            return False
        with translate_store_errors(self.label):
            await self.session.delete(record)
            await self.session.flush()
        return True

    async def upsert(
        self,
        *conditions: ColumnElement[bool],
        values: Mapping[str, Any],
        defaults: Mapping[str, Any] | None = None,
    ) -> ModelT:
        """Merge ``values`` into the row matching ``conditions``, or create it
        from ``defaults`` plus ``values`` when no row matches."""
        record = await self.find_one(*conditions)
        if record is None:
            return await self.create(self.model(**{**(defaults or {}), **values}))
        return await self.apply(record, values)
