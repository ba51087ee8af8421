"""
RoomEase — ProfileDetails model (habits, languages, interests, move-in date)
and its PreferredLocation children.
"""

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomease.database import Base, JSONDocument, utcnow


class ProfileDetails(Base):
    __tablename__ = "profile_details"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    habits: Mapped[dict | None] = mapped_column(
        JSONDocument, nullable=True, comment="Lifestyle habits sub-record"
    )
    languages: Mapped[list | None] = mapped_column(
        JSONDocument, nullable=True, comment="Array of language names"
    )
    interests: Mapped[list | None] = mapped_column(
        JSONDocument, nullable=True, comment="Array of interest tags"
    )
    move_in_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=utcnow, nullable=True
    )

    # ── Relationships ──────────────────────────────────────────────
    user: Mapped["User"] = relationship("User", back_populates="details")
    preferred_locations: Mapped[list["PreferredLocation"]] = relationship(
        "PreferredLocation",
        back_populates="details",
        cascade="all, delete-orphan",
        order_by="PreferredLocation.position",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<ProfileDetails user={self.user_id} "
            f"locations={len(self.preferred_locations)}>"
        )


class PreferredLocation(Base):
    __tablename__ = "preferred_locations"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    details_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profile_details.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    area: Mapped[str | None] = mapped_column(String(120), index=True, nullable=True)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True)
    lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    lng: Mapped[float | None] = mapped_column(Float, nullable=True)

    details: Mapped["ProfileDetails"] = relationship(
        "ProfileDetails", back_populates="preferred_locations"
    )

    def __repr__(self) -> str:
        return f"<PreferredLocation {self.area!r}, {self.city!r}>"
