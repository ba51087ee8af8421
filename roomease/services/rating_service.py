"""
RoomEase — Rating aggregation

``summarize_ratings`` is the one place an average rating is derived.  Listing
collections feed it from a single grouped SQL aggregate so that no raw rating
list is ever loaded at listing level.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.models.review import Review
from roomease.store import translate_store_errors

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    total_reviews: int


def summarize_ratings(rating_sum: int | float | Decimal, review_count: int) -> RatingSummary:
    """Mean rating rounded half-up to one decimal; ``0.0`` with no reviews."""
    if review_count <= 0:
        return RatingSummary(average_rating=0.0, total_reviews=0)
    mean = Decimal(str(rating_sum)) / Decimal(review_count)
    return RatingSummary(
        average_rating=float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)),
        total_reviews=review_count,
    )


async def rating_summaries(
    db: AsyncSession,
    listing_ids: Iterable[uuid.UUID],
) -> dict[uuid.UUID, RatingSummary]:
    """Return a summary for every id in ``listing_ids`` (zero when unreviewed)."""
    ids = list(dict.fromkeys(listing_ids))
    if not ids:
        return {}

    stmt = (
        select(Review.listing_id, func.sum(Review.rating), func.count(Review.id))
        .where(Review.listing_id.in_(ids))
        .group_by(Review.listing_id)
    )
    with translate_store_errors("Review"):
        rows = (await db.execute(stmt)).all()

    summaries = {listing_id: summarize_ratings(0, 0) for listing_id in ids}
    for listing_id, rating_sum, review_count in rows:
        summaries[listing_id] = summarize_ratings(rating_sum or 0, int(review_count))
    return summaries
