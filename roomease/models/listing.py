"""
RoomEase — Listing model.

``user_id`` is an opaque owner reference: it carries no foreign key so that
deleting a profile leaves the listing in place.  Owners are resolved by
lookup in ``roomease.services.listing_service``.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from roomease.database import Base, JSONDocument, utcnow


class Listing(Base):
    __tablename__ = "listings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    rent: Mapped[float] = mapped_column(Float, nullable=False)
    type: Mapped[str] = mapped_column(String(40), index=True, nullable=False)
    images: Mapped[list] = mapped_column(
        JSONDocument, default=list, nullable=False, comment="Array of image URLs"
    )
    amenities: Mapped[list] = mapped_column(
        JSONDocument, default=list, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(),
        index=True, nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=utcnow, nullable=True
    )

    def __repr__(self) -> str:
        return f"<Listing {self.title!r} id={self.id}>"
