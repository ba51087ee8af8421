"""Initial schema — all 6 RoomEase tables.

Revision ID: 001_initial
Revises:
Create Date: 2024-06-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # ── 1. users ────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String, nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("profile_picture", sa.String, nullable=True),
        sa.Column(
            "gender",
            sa.String(32),
            nullable=True,
            comment="Male / Female / Other / Prefer not to say",
        ),
        sa.Column("age", sa.Integer, nullable=True),
        sa.Column("profession", sa.String(120), nullable=True),
        sa.Column(
            "occupation",
            sa.String(32),
            nullable=True,
            comment="Student / Working Professional / Freelancer / Business / Other",
        ),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("budget_min", sa.Integer, nullable=True),
        sa.Column("budget_max", sa.Integer, nullable=True),
        sa.Column("currency", sa.String(8), server_default="BDT", nullable=False),
        sa.Column(
            "looking_for",
            sa.String(16),
            server_default="Both",
            nullable=False,
            comment="Room / Roommate / Both",
        ),
        sa.Column(
            "is_profile_complete",
            sa.Boolean,
            server_default="false",
            nullable=False,
            comment="Derived; recomputed by ProfileService on every write",
        ),
        sa.Column("is_verified", sa.Boolean, server_default="false", nullable=False),
        sa.Column("is_active", sa.Boolean, server_default="true", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_gender", "users", ["gender"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # ── 2. profile_details (one per user) ───────────────────────────
    op.create_table(
        "profile_details",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            unique=True,
            nullable=False,
        ),
        sa.Column(
            "habits",
            postgresql.JSONB,
            nullable=True,
            comment="Lifestyle habits sub-record",
        ),
        sa.Column(
            "languages",
            postgresql.JSONB,
            nullable=True,
            comment="Array of language names",
        ),
        sa.Column(
            "interests",
            postgresql.JSONB,
            nullable=True,
            comment="Array of interest tags",
        ),
        sa.Column("move_in_date", sa.Date, nullable=True),
        *_timestamps(),
    )

    # ── 3. preferred_locations ──────────────────────────────────────
    op.create_table(
        "preferred_locations",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "details_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("profile_details.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("area", sa.String(120), nullable=True),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("lat", sa.Float, nullable=True),
        sa.Column("lng", sa.Float, nullable=True),
    )
    op.create_index(
        "ix_preferred_locations_details_id", "preferred_locations", ["details_id"]
    )
    op.create_index("ix_preferred_locations_area", "preferred_locations", ["area"])

    # ── 4. listings ─────────────────────────────────────────────────
    op.create_table(
        "listings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            comment="Owner; opaque reference without a foreign key",
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("rent", sa.Float, nullable=False),
        sa.Column("type", sa.String(40), nullable=False),
        sa.Column(
            "images",
            postgresql.JSONB,
            nullable=False,
            comment="Array of image URLs",
        ),
        sa.Column("amenities", postgresql.JSONB, nullable=False),
        sa.Column("is_active", sa.Boolean, server_default="true", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_listings_user_id", "listings", ["user_id"])
    op.create_index("ix_listings_type", "listings", ["type"])
    op.create_index("ix_listings_created_at", "listings", ["created_at"])

    # ── 5. reviews ──────────────────────────────────────────────────
    op.create_table(
        "reviews",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "listing_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("listings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("rating", sa.Integer, nullable=False, comment="1-5"),
        sa.Column("comment", sa.Text, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "listing_id", name="uq_review_user_listing"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )
    op.create_index("ix_reviews_listing_id", "reviews", ["listing_id"])
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"])

    # ── 6. favorites ────────────────────────────────────────────────
    op.create_table(
        "favorites",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "listing_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("listings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("user_id", "listing_id", name="uq_favorite_user_listing"),
    )
    op.create_index("ix_favorites_user_id", "favorites", ["user_id"])
    op.create_index("ix_favorites_listing_id", "favorites", ["listing_id"])


def downgrade() -> None:
    # Drop in reverse order (children / dependents first).
    op.drop_index("ix_favorites_listing_id", table_name="favorites")
    op.drop_index("ix_favorites_user_id", table_name="favorites")
    op.drop_table("favorites")

    op.drop_index("ix_reviews_user_id", table_name="reviews")
    op.drop_index("ix_reviews_listing_id", table_name="reviews")
    op.drop_table("reviews")

    op.drop_index("ix_listings_created_at", table_name="listings")
    op.drop_index("ix_listings_type", table_name="listings")
    op.drop_index("ix_listings_user_id", table_name="listings")
    op.drop_table("listings")

    op.drop_index("ix_preferred_locations_area", table_name="preferred_locations")
    op.drop_index("ix_preferred_locations_details_id", table_name="preferred_locations")
    op.drop_table("preferred_locations")

    op.drop_table("profile_details")

    op.drop_index("ix_users_created_at", table_name="users")
    op.drop_index("ix_users_gender", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
