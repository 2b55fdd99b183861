"""Test configuration."""

import pytest
from pydantic import ValidationError

from src.tsaap.config import Settings, get_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.default_page_size == 20
        assert settings.max_page_size == 100
        assert settings.check_email_on_registration is False
        assert settings.algorithm == "HS256"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MAX_PAGE_SIZE", "50")
        monkeypatch.setenv("CHECK_EMAIL_ON_REGISTRATION", "true")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.max_page_size == 50
        assert settings.check_email_on_registration is True
        assert settings.log_level == "DEBUG"

    def test_get_settings_returns_shared_instance(self):
        assert get_settings() is get_settings()

    def test_default_page_size_cannot_exceed_max(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_page_size=50, max_page_size=10)

    def test_log_level_is_uppercased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"
