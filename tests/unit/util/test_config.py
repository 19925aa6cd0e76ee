"""Unit tests for settings and logging setup."""

import logging

from dischord.config import Settings
from dischord.util.logging import setup_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Without overrides the SQL backend targets local PostgreSQL."""
        monkeypatch.delenv("STORE__BACKEND", raising=False)
        monkeypatch.delenv("DATABASE__URL", raising=False)

        settings = Settings()

        assert settings.store.backend == "sql"
        assert settings.database_url.startswith("postgresql+asyncpg://")

    def test_nested_overrides(self, monkeypatch):
        """Nested values are read with the ``__`` delimiter."""
        monkeypatch.setenv("STORE__BACKEND", "memory")
        monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///:memory:")
        monkeypatch.setenv("DATABASE__POOL_SIZE", "2")

        settings = Settings()

        assert settings.store.backend == "memory"
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.database.pool_size == 2


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_debug_enables_debug_level(self):
        """Debug mode turns on debug logging for the application."""
        setup_logging(Settings(environment="test", debug=True))

        assert logging.getLogger("dischord").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_default_level_is_info(self):
        """Outside debug mode the application logs at INFO."""
        setup_logging(Settings(environment="test", debug=False))

        assert logging.getLogger("dischord").level == logging.INFO
