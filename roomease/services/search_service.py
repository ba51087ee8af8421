"""
RoomEase — Filter / Search Engine

Turns sparse query criteria into a list of SQLAlchemy predicates and runs the
search through the store adapter.  Profile searches are always paginated;
listing searches return every match unless the caller asks for a page.

Only criteria that are present contribute a predicate; a blank query value
counts as absent.  Results are ordered newest first with the primary key as
tie-break, so the same store state and criteria always yield the same page.

Profile criteria
----------------
gender       exact match
profession   case-insensitive substring
location     case-insensitive substring of any preferred location's area
lookingFor   exact match
minBudget    profile.budget_max >= minBudget
maxBudget    profile.budget_min <= maxBudget

The two budget bounds together select every profile whose budget range
overlaps the requested one.

Listing criteria
----------------
location     case-insensitive substring
type         exact match
minRent      listing.rent >= minRent
maxRent      listing.rent <= maxRent

Both searches only ever return active records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

import structlog
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.config import get_settings
from roomease.errors import InvalidArgument
from roomease.models.listing import Listing
from roomease.models.profile import PreferredLocation, ProfileDetails
from roomease.models.user import User
from roomease.schemas.enums import Gender, LookingFor
from roomease.store import RecordStore

logger = structlog.get_logger("roomease.search_service")

T = TypeVar("T")


# ──────────────────────────────────────────────────────────────────────────────
# Query-string parsing
# ──────────────────────────────────────────────────────────────────────────────

def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_number(name: str, value: Optional[str], kind: type = int):
    value = _clean(value)
    if value is None:
        return None
    try:
        number = kind(value)
    except ValueError as exc:
        raise InvalidArgument(
            f"{name} must be a number", error=f"{name}={value!r}"
        ) from exc
    if number < 0 or (isinstance(number, float) and not math.isfinite(number)):
        raise InvalidArgument(f"{name} must be a non-negative number", error=f"{name}={value!r}")
    return number


def _parse_choice(name: str, value: Optional[str], enum: type[Enum]) -> Optional[str]:
    value = _clean(value)
    if value is None:
        return None
    allowed = [member.value for member in enum]
    if value not in allowed:
        raise InvalidArgument(
            f"{name} must be one of: {', '.join(allowed)}", error=f"{name}={value!r}"
        )
    return value


def resolve_page(page: Optional[str], limit: Optional[str]) -> tuple[int, int]:
    """Parse ``page``/``limit`` query values, applying defaults and bounds."""
    settings = get_settings()
    page_no = _parse_number("page", page)
    if page_no is None:
        page_no = 1
    size = _parse_number("limit", limit)
    if size is None:
        size = settings.DEFAULT_PAGE_SIZE
    if page_no < 1:
        raise InvalidArgument("page must be at least 1", error=f"page={page!r}")
    if not 1 <= size <= settings.MAX_PAGE_SIZE:
        raise InvalidArgument(
            f"limit must be between 1 and {settings.MAX_PAGE_SIZE}",
            error=f"limit={limit!r}",
        )
    return page_no, size


def wants_page(page: Optional[str], limit: Optional[str]) -> bool:
    """True when the caller supplied a non-blank ``page`` or ``limit``."""
    return _clean(page) is not None or _clean(limit) is not None


# ──────────────────────────────────────────────────────────────────────────────
# Criteria
# ──────────────────────────────────────────────────────────────────────────────

@dataclass
class ProfileCriteria:
    gender: Optional[str] = None
    profession: Optional[str] = None
    location: Optional[str] = None
    looking_for: Optional[str] = None
    min_budget: Optional[int] = None
    max_budget: Optional[int] = None

    @classmethod
    def from_query(
        cls,
        *,
        gender: Optional[str] = None,
        profession: Optional[str] = None,
        location: Optional[str] = None,
        looking_for: Optional[str] = None,
        min_budget: Optional[str] = None,
        max_budget: Optional[str] = None,
    ) -> "ProfileCriteria":
        return cls(
            gender=_parse_choice("gender", gender, Gender),
            profession=_clean(profession),
            location=_clean(location),
            looking_for=_parse_choice("lookingFor", looking_for, LookingFor),
            min_budget=_parse_number("minBudget", min_budget),
            max_budget=_parse_number("maxBudget", max_budget),
        )


@dataclass
class ListingCriteria:
    location: Optional[str] = None
    type: Optional[str] = None
    min_rent: Optional[float] = None
    max_rent: Optional[float] = None

    @classmethod
    def from_query(
        cls,
        *,
        location: Optional[str] = None,
        type: Optional[str] = None,
        min_rent: Optional[str] = None,
        max_rent: Optional[str] = None,
    ) -> "ListingCriteria":
        return cls(
            location=_clean(location),
            type=_clean(type),
            min_rent=_parse_number("minRent", min_rent, float),
            max_rent=_parse_number("maxRent", max_rent, float),
        )


@dataclass
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: Optional[int]

    @property
    def pages(self) -> int:
        if not self.total:
            return 0
        if self.limit is None:
            return 1
        return math.ceil(self.total / self.limit)


# ──────────────────────────────────────────────────────────────────────────────
# Predicate builders
# ──────────────────────────────────────────────────────────────────────────────

def profile_conditions(criteria: ProfileCriteria) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = [User.is_active.is_(True)]

    if criteria.gender is not None:
        conditions.append(User.gender == criteria.gender)
    if criteria.profession is not None:
        conditions.append(User.profession.icontains(criteria.profession, autoescape=True))
    if criteria.location is not None:
        conditions.append(
            User.details.has(
                ProfileDetails.preferred_locations.any(
                    PreferredLocation.area.icontains(criteria.location, autoescape=True)
                )
            )
        )
    if criteria.looking_for is not None:
        conditions.append(User.looking_for == criteria.looking_for)
    if criteria.min_budget is not None:
        conditions.append(User.budget_max >= criteria.min_budget)
    if criteria.max_budget is not None:
        conditions.append(User.budget_min <= criteria.max_budget)

    return conditions


def listing_conditions(criteria: ListingCriteria) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = [Listing.is_active.is_(True)]

    if criteria.location is not None:
        conditions.append(Listing.location.icontains(criteria.location, autoescape=True))
    if criteria.type is not None:
        conditions.append(Listing.type == criteria.type)
    if criteria.min_rent is not None:
        conditions.append(Listing.rent >= criteria.min_rent)
    if criteria.max_rent is not None:
        conditions.append(Listing.rent <= criteria.max_rent)

    return conditions


# ──────────────────────────────────────────────────────────────────────────────
# Searches
# ──────────────────────────────────────────────────────────────────────────────

async def list_profiles(
    db: AsyncSession,
    criteria: ProfileCriteria,
    page: int,
    limit: int,
) -> Page[User]:
    log = logger.bind(page=page, limit=limit)
    rows, total = await RecordStore(db, User).find_page(
        *profile_conditions(criteria),
        skip=(page - 1) * limit,
        limit=limit,
        order_by=(User.created_at.desc(), User.id.desc()),
    )
    log.info("list_profiles", total=total, returned=len(rows))
    return Page(items=rows, total=total, page=page, limit=limit)


async def list_listings(
    db: AsyncSession,
    criteria: ListingCriteria,
    page: int = 1,
    limit: Optional[int] = None,
) -> Page[Listing]:
    """Matching active listings, newest first.  Without a ``limit`` every
    match is returned."""
    log = logger.bind(page=page, limit=limit)
    rows, total = await RecordStore(db, Listing).find_page(
        *listing_conditions(criteria),
        skip=(page - 1) * limit if limit is not None else 0,
        limit=limit,
        order_by=(Listing.created_at.desc(), Listing.id.desc()),
    )
    log.info("list_listings", total=total, returned=len(rows))
    return Page(items=rows, total=total, page=page, limit=limit)
