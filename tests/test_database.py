"""Tests for database URL handling."""
from alembic.config import Config

from roomease.database import migration_url, normalise_database_url


class TestDatabaseUrls:

    def test_plain_postgres_upgraded_to_asyncpg(self):
        assert (
            normalise_database_url("postgresql://app:pw@db:5432/roomease")
            == "postgresql+asyncpg://app:pw@db:5432/roomease"
        )

    def test_sqlite_upgraded_to_aiosqlite(self):
        assert normalise_database_url("sqlite:///:memory:") == "sqlite+aiosqlite:///:memory:"

    def test_percent_encoded_password_survives_alembic_config(self):
        url = "postgresql://app:p%40ss%25word@db:5432/roomease"
        config = Config()
        config.set_main_option("sqlalchemy.url", migration_url(url))

        assert config.get_main_option("sqlalchemy.url") == (
            "postgresql+asyncpg://app:p%40ss%25word@db:5432/roomease"
        )
