import re

from pydantic import Field, field_validator

from roomease.config import get_settings
from roomease.schemas.common import RequestModel, ResponseModel
from roomease.schemas.profile import ProfileFields, ProfileResponse

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalise_email(v: str) -> str:
    v = v.strip().lower()
    if not _EMAIL_RE.match(v):
        raise ValueError("Invalid email address")
    return v


class RegisterRequest(ProfileFields):
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(max_length=320)
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _normalise_email(v)

    @field_validator("password")
    @classmethod
    def _password_length(cls, v: str) -> str:
        min_length = get_settings().PASSWORD_MIN_LENGTH
        if len(v) < min_length:
            raise ValueError(f"Password must be at least {min_length} characters")
        return v


class LoginRequest(RequestModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return v.strip().lower()


class AuthPayload(ResponseModel):
    user: ProfileResponse
    token: str
