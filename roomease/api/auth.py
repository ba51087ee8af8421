"""
RoomEase — Auth API

Registration (first step of the two-step registration form) and login.  Both
return the public profile plus a bearer token.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomease.auth import issue_token
from roomease.database import get_db
from roomease.schemas.common import Envelope
from roomease.schemas.profile import ProfileResponse
from roomease.schemas.user import AuthPayload, LoginRequest, RegisterRequest
from roomease.services.profile_service import ProfileService

logger = structlog.get_logger("roomease.api.auth")

router = APIRouter()


# ──────────────────────────────────────────────────────────────────────────────
# POST /register — Create an account
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/register",
    response_model=Envelope[AuthPayload],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> Envelope[AuthPayload]:
    """Create the account with name, email and password (plus any optional
    profile fields).  The profile is completed in a second step via
    ``POST /profiles/{id}/complete``."""
    user = await ProfileService(db).create_profile(payload)
    return Envelope(
        message="User registered successfully",
        data=AuthPayload(
            user=ProfileResponse.model_validate(user),
            token=issue_token(user.id),
        ),
    )


# ──────────────────────────────────────────────────────────────────────────────
# POST /login — Exchange credentials for a token
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/login",
    response_model=Envelope[AuthPayload],
    summary="Log in with email and password",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> Envelope[AuthPayload]:
    user = await ProfileService(db).authenticate(payload.email, payload.password)
    logger.info("login_complete", user_id=str(user.id))
    return Envelope(
        message="Login successful",
        data=AuthPayload(
            user=ProfileResponse.model_validate(user),
            token=issue_token(user.id),
        ),
    )
