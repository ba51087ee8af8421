"""
RoomEase — Application Configuration

Loads all configuration from environment variables (and an optional .env file)
using Pydantic Settings.  A cached ``get_settings()`` helper is provided so that
FastAPI dependency-injection (and any other call-site) always receives the same
validated instance without re-parsing the environment on every request.
"""

from __future__ import annotations

from functools import lru_cache

from cryptography.fernet import Fernet
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the RoomEase API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Database
    # ------------------------------------------------------------------ #
    DATABASE_URL: str
    DB_ECHO: bool = False

    # ------------------------------------------------------------------ #
    # Security
    # ------------------------------------------------------------------ #
    TOKEN_SECRET: str  # Fernet key used to sign bearer tokens
    TOKEN_TTL_SECONDS: int = 7 * 24 * 3600
    PASSWORD_MIN_LENGTH: int = 6

    # ------------------------------------------------------------------ #
    # Runtime environment
    # ------------------------------------------------------------------ #
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # ------------------------------------------------------------------ #
    # CORS
    # ------------------------------------------------------------------ #
    ALLOWED_ORIGINS: str = "*"

    # ------------------------------------------------------------------ #
    # Search & pagination
    # ------------------------------------------------------------------ #
    DEFAULT_PAGE_SIZE: int = 12
    MAX_PAGE_SIZE: int = 100

    # ------------------------------------------------------------------ #
    # Profile defaults
    # ------------------------------------------------------------------ #
    DEFAULT_CURRENCY: str = "BDT"

    # ------------------------------------------------------------------ #
    # Derived helpers
    # ------------------------------------------------------------------ #
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list split on commas."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @field_validator("TOKEN_SECRET")
    @classmethod
    def _token_secret_must_be_fernet_key(cls, v: str) -> str:
        try:
            Fernet(v.encode())
        except (ValueError, TypeError) as exc:
            raise ValueError(
                "TOKEN_SECRET must be a url-safe base64-encoded 32-byte key"
            ) from exc
        return v

    @field_validator("DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def _page_size_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Page size must be at least 1, got {v}")
        return v

    @model_validator(mode="after")
    def _default_page_size_within_max(self) -> "Settings":
        if self.DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, validated ``Settings`` instance.

    Using ``@lru_cache`` guarantees the .env file is read and validated
    exactly once per process lifetime.  Import this function anywhere you
    need access to configuration::

        from roomease.config import get_settings
        settings = get_settings()
    """
    return Settings()  # type: ignore[call-arg]
