"""
RoomEase — Bearer tokens

Tokens are Fernet ciphertexts of the user's UUID bytes, signed and encrypted
with ``TOKEN_SECRET``.  Fernet embeds the issue timestamp, so expiry is a
``ttl`` check on decrypt and no token state is stored server-side.
"""

from __future__ import annotations

import uuid

from cryptography.fernet import Fernet, InvalidToken
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from roomease.config import get_settings
from roomease.errors import Unauthorized

_bearer = HTTPBearer(auto_error=False)


def get_fernet() -> Fernet:
    return Fernet(get_settings().TOKEN_SECRET.encode())


def issue_token(user_id: uuid.UUID) -> str:
    return get_fernet().encrypt(user_id.bytes).decode("ascii")


def read_token(token: str) -> uuid.UUID:
    """Return the user id carried by ``token`` or raise ``Unauthorized``."""
    ttl = get_settings().TOKEN_TTL_SECONDS
    try:
        payload = get_fernet().decrypt(token.encode("ascii"), ttl=ttl)
        return uuid.UUID(bytes=payload)
    except (InvalidToken, UnicodeEncodeError, ValueError) as exc:
        raise Unauthorized("Invalid or expired token") from exc


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> uuid.UUID:
    """FastAPI dependency resolving the verified caller id from the
    ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Authentication required")
    return read_token(credentials.credentials)
