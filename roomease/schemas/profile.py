from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator, model_validator

from roomease.schemas.common import RequestModel, ResponseModel
from roomease.schemas.enums import (
    Cleanliness,
    Drinking,
    FoodPreference,
    Gender,
    GuestFrequency,
    LookingFor,
    Occupation,
    Pets,
    Smoking,
)


# ── Requests ─────────────────────────────────────────────────────────────────

class Habits(RequestModel):
    model_config = ConfigDict(validate_default=True)

    smoking: Smoking = Smoking.NO
    drinking: Drinking = Drinking.NO
    pets: Pets = Pets.NO_PETS
    cleanliness: Cleanliness = Cleanliness.MODERATE
    food_preference: Optional[FoodPreference] = None
    night_owl: bool = False
    guests: GuestFrequency = GuestFrequency.SOMETIMES


class LocationIn(RequestModel):
    area: str = Field(min_length=1, max_length=120)
    city: Optional[str] = Field(None, max_length=120)
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)


class ProfileFields(RequestModel):
    """Every client-writable profile field, all optional.

    Blank strings and nulls are dropped before validation, so an update can
    never clear a stored value by sending an empty form field.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    phone: Optional[str] = Field(None, max_length=32)
    profile_picture: Optional[str] = None
    gender: Optional[Gender] = None
    age: Optional[int] = Field(None, ge=18, le=100)
    profession: Optional[str] = Field(None, max_length=120)
    occupation: Optional[Occupation] = None
    bio: Optional[str] = Field(None, max_length=500)
    budget_min: Optional[int] = Field(None, ge=0)
    budget_max: Optional[int] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=8)
    looking_for: Optional[LookingFor] = None
    habits: Optional[Habits] = None
    preferred_locations: Optional[list[LocationIn]] = None
    languages: Optional[list[str]] = None
    interests: Optional[list[str]] = None
    move_in_date: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if value is not None and not (isinstance(value, str) and not value.strip())
        }

    @field_validator("languages", "interests")
    @classmethod
    def _clean_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        seen: list[str] = []
        for tag in (t.strip() for t in v):
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class ProfileUpdate(ProfileFields):
    pass


class ProfileComplete(ProfileFields):
    """Payload of the second registration step; the fields the completion
    rule depends on are mandatory here."""

    gender: Gender
    profession: str = Field(min_length=1, max_length=120)
    budget_min: int = Field(ge=0)
    budget_max: int = Field(ge=0)
    preferred_locations: list[LocationIn] = Field(min_length=1)


# ── Responses ────────────────────────────────────────────────────────────────

class HabitsResponse(ResponseModel):
    smoking: Optional[str] = None
    drinking: Optional[str] = None
    pets: Optional[str] = None
    cleanliness: Optional[str] = None
    food_preference: Optional[str] = None
    night_owl: bool = False
    guests: Optional[str] = None


class LocationResponse(ResponseModel):
    area: Optional[str] = None
    city: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class ProfileDetailsResponse(ResponseModel):
    habits: Optional[HabitsResponse] = None
    preferred_locations: list[LocationResponse] = []
    languages: list[str] = []
    interests: list[str] = []
    move_in_date: Optional[date] = None

    @field_validator("languages", "interests", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ProfileResponse(ResponseModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    profile_picture: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    profession: Optional[str] = None
    occupation: Optional[str] = None
    bio: Optional[str] = None
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    currency: str
    looking_for: str
    is_profile_complete: bool
    is_verified: bool
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    details: Optional[ProfileDetailsResponse] = Field(None, alias="profileDetails")
