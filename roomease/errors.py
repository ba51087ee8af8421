"""
RoomEase — Service error taxonomy.

Services raise these; ``roomease.main`` renders them as the failure envelope
``{"success": false, "message": ..., "error": ...}`` with the HTTP status
carried by each class.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(Exception):
    """Base class for every error a service may surface to a client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None, error: str | None = None) -> None:
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.message!r}>"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(ServiceError):
    """Duplicate key: email, favorite or review for the same pair."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InvalidArgument(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class Unauthorized(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Internal(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"
