"""
RoomEase — User model (account + base profile fields).
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomease.database import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(
        String(320), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    profile_picture: Mapped[str | None] = mapped_column(String, nullable=True)

    # ── Personal details ───────────────────────────────────────────
    gender: Mapped[str | None] = mapped_column(
        String(32), index=True, nullable=True,
        comment="Male / Female / Other / Prefer not to say",
    )
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profession: Mapped[str | None] = mapped_column(String(120), nullable=True)
    occupation: Mapped[str | None] = mapped_column(
        String(32), nullable=True,
        comment="Student / Working Professional / Freelancer / Business / Other",
    )
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Budget & preferences ───────────────────────────────────────
    budget_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    budget_max: Mapped[int | None] = mapped_column(Integer, nullable=True)
    currency: Mapped[str] = mapped_column(
        String(8), default="BDT", server_default="BDT", nullable=False
    )
    looking_for: Mapped[str] = mapped_column(
        String(16), default="Both", server_default="Both", nullable=False,
        comment="Room / Roommate / Both",
    )

    # ── Account status ─────────────────────────────────────────────
    is_profile_complete: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False,
        comment="Derived; recomputed by ProfileService on every write",
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
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

    # ── Relationships ──────────────────────────────────────────────
    details: Mapped["ProfileDetails | None"] = relationship(
        "ProfileDetails",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User {self.email!r} id={self.id}>"
