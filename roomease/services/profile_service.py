"""
RoomEase — Profile Entity Manager

Owns the user/profile lifecycle:

  * registration (``create_profile``) with a partially populated profile
  * the second registration step (``complete_profile``)
  * partial updates (``update_profile``)
  * soft (``deactivate_profile``) and hard (``delete_profile``) removal
  * credential checks for login (``authenticate``)

Every write path funnels through ``_merge``: supplied base fields are written
onto the user, the ``profile_details`` sub-record is upserted, and the cached
``is_profile_complete`` flag is recomputed from the merged state.  Callers can
never set the flag themselves.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Any

import structlog
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.config import get_settings
from roomease.errors import Conflict, InvalidArgument, NotFound, Unauthorized
from roomease.models.profile import PreferredLocation, ProfileDetails
from roomease.models.user import User
from roomease.schemas.profile import Habits, ProfileFields
from roomease.schemas.user import RegisterRequest
from roomease.store import RecordStore
from roomease.utils.security import hash_password, verify_password

logger = structlog.get_logger("roomease.profile_service")

# Base columns on ``users`` that a client may write.
_USER_FIELDS: tuple[str, ...] = (
    "name",
    "phone",
    "profile_picture",
    "gender",
    "age",
    "profession",
    "occupation",
    "bio",
    "budget_min",
    "budget_max",
    "currency",
    "looking_for",
)

# Scalar columns on ``profile_details``.
_DETAIL_FIELDS: tuple[str, ...] = ("languages", "interests", "move_in_date")


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def is_profile_complete(user: User) -> bool:
    """The completion rule.

    A profile is complete iff name, email, gender and profession are
    non-empty, both budget bounds are set, and at least one preferred
    location exists.
    """
    locations = user.details.preferred_locations if user.details is not None else []
    return (
        all(_present(v) for v in (user.name, user.email, user.gender, user.profession))
        and user.budget_min is not None
        and user.budget_max is not None
        and len(locations) > 0
    )


def _location_key(loc: Any) -> tuple:
    if isinstance(loc, dict):
        return (loc.get("area"), loc.get("city"), loc.get("lat"), loc.get("lng"))
    return (loc.area, loc.city, loc.lat, loc.lng)


class ProfileService:
    """User/profile CRUD bound to one request's ``AsyncSession``."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.users = RecordStore(db, User)
        self.details = RecordStore(db, ProfileDetails)

    # ══════════════════════════════════════════════════════════════════════
    # Reads
    # ══════════════════════════════════════════════════════════════════════

    async def get_profile(self, user_id: uuid.UUID) -> User:
        user = await self.users.get(user_id)
        if user is None:
            logger.warning("get_profile_not_found", user_id=str(user_id))
            raise NotFound("User not found")
        return user

    async def find_by_email(self, email: str) -> User | None:
        return await self.users.find_one(func.lower(User.email) == email.strip().lower())

    # ══════════════════════════════════════════════════════════════════════
    # Writes
    # ══════════════════════════════════════════════════════════════════════

    async def create_profile(self, payload: RegisterRequest) -> User:
        """Register a new account with whatever profile fields were supplied."""
        log = logger.bind(email=payload.email)
        log.info("create_profile_start")

        if await self.find_by_email(payload.email) is not None:
            log.warning("create_profile_duplicate_email")
            raise Conflict(
                "User already exists with this email",
                error=f"duplicate key: email={payload.email}",
            )

        fields = payload.model_dump(exclude_unset=True, exclude={"email", "password"})
        self._check_budget(None, fields)

        password_hash = await asyncio.to_thread(hash_password, payload.password)
        user = User(
            email=payload.email,
            password_hash=password_hash,
            currency=get_settings().DEFAULT_CURRENCY,
            details=None,
        )
        for field in _USER_FIELDS:
            if field in fields:
                setattr(user, field, fields[field])
        await self.users.create(user)

        await self._merge(user, fields, base_written=True)

        log.info(
            "create_profile_complete",
            user_id=str(user.id),
            is_profile_complete=user.is_profile_complete,
        )
        return user

    async def complete_profile(self, user_id: uuid.UUID, payload: ProfileFields) -> User:
        """Second registration step.  Re-invoking with the same payload
        leaves the profile unchanged."""
        log = logger.bind(user_id=str(user_id))
        log.info("complete_profile_start")

        user = await self.get_profile(user_id)
        await self._merge(user, payload.model_dump(exclude_unset=True))

        log.info("complete_profile_complete", is_profile_complete=user.is_profile_complete)
        return user

    async def update_profile(self, user_id: uuid.UUID, payload: ProfileFields) -> User:
        """Apply only the fields that were supplied and non-null."""
        log = logger.bind(user_id=str(user_id))
        fields = payload.model_dump(exclude_unset=True)
        log.info("update_profile_start", fields=sorted(fields))

        user = await self.get_profile(user_id)
        await self._merge(user, fields)

        log.info("update_profile_complete", is_profile_complete=user.is_profile_complete)
        return user

    async def deactivate_profile(self, user_id: uuid.UUID) -> User:
        user = await self.get_profile(user_id)
        await self.users.apply(user, {"is_active": False})
        logger.info("deactivate_profile_complete", user_id=str(user_id))
        return user

    async def delete_profile(self, user_id: uuid.UUID) -> None:
        """Remove the user and its details.  Listings, reviews and favorites
        keep their opaque owner reference."""
        deleted = await self.users.delete(user_id)
        if not deleted:
            logger.warning("delete_profile_not_found", user_id=str(user_id))
            raise NotFound("User not found")
        logger.info("delete_profile_complete", user_id=str(user_id))

    async def authenticate(self, email: str, password: str) -> User:
        log = logger.bind(email=email)
        user = await self.find_by_email(email)
        if user is None:
            log.warning("authenticate_unknown_email")
            raise Unauthorized("Invalid email or password")
        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            log.warning("authenticate_bad_password", user_id=str(user.id))
            raise Unauthorized("Invalid email or password")
        if not user.is_active:
            log.warning("authenticate_inactive", user_id=str(user.id))
            raise Unauthorized("Account is deactivated")
        return user

    # ══════════════════════════════════════════════════════════════════════
    # Internals
    # ══════════════════════════════════════════════════════════════════════

    @staticmethod
    def _check_budget(user: User | None, fields: dict[str, Any]) -> None:
        budget_min = fields.get("budget_min", user.budget_min if user else None)
        budget_max = fields.get("budget_max", user.budget_max if user else None)
        if budget_min is not None and budget_max is not None and budget_min > budget_max:
            raise InvalidArgument(
                "budgetMin cannot exceed budgetMax",
                error=f"budgetMin={budget_min} budgetMax={budget_max}",
            )

    async def _merge(
        self,
        user: User,
        fields: dict[str, Any],
        *,
        base_written: bool = False,
    ) -> None:
        """Write ``fields`` onto ``user`` and its details, then recompute
        the completion flag."""
        self._check_budget(user, fields)

        if not base_written:
            values = {f: fields[f] for f in _USER_FIELDS if f in fields}
            if values:
                await self.users.apply(user, values)

        detail_values = self._detail_values(user.details, fields)
        if detail_values:
            await self.details.upsert(
                ProfileDetails.user_id == user.id,
                values=detail_values,
                defaults={"user": user, "preferred_locations": []},
            )

        await self.users.apply(user, {"is_profile_complete": is_profile_complete(user)})

    @staticmethod
    def _detail_values(
        details: ProfileDetails | None,
        fields: dict[str, Any],
    ) -> dict[str, Any]:
        values = {f: fields[f] for f in _DETAIL_FIELDS if f in fields}

        if "habits" in fields:
            stored = details.habits if details is not None and details.habits else {}
            values["habits"] = {
                **Habits().model_dump(mode="json"),
                **stored,
                **fields["habits"],
            }

        if "preferred_locations" in fields:
            supplied = fields["preferred_locations"]
            current = details.preferred_locations if details is not None else []
            if [_location_key(loc) for loc in supplied] != [
                _location_key(loc) for loc in current
            ]:
                values["preferred_locations"] = [
                    PreferredLocation(position=i, **loc)
                    for i, loc in enumerate(supplied)
                ]

        return values
