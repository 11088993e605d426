"""Tests for application settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError as SettingsError

from app.config import Settings, get_settings
from core.logging_config import setup_logging


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = Settings(ENVIRONMENT="development")
        assert settings.DUPLICATE_THRESHOLD == 0.7
        assert settings.STALE_AFTER_DAYS == 30
        assert settings.is_development
        assert not settings.is_production

    def test_cors_origins_list(self):
        settings = Settings(ALLOWED_ORIGINS="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_threshold_out_of_range(self):
        with pytest.raises(SettingsError):
            Settings(DUPLICATE_THRESHOLD=1.5)

    def test_stale_window_must_be_positive(self):
        with pytest.raises(SettingsError):
            Settings(STALE_AFTER_DAYS=0)

    def test_log_format_normalized(self):
        assert Settings(LOG_FORMAT="TEXT").LOG_FORMAT == "text"
        with pytest.raises(SettingsError):
            Settings(LOG_FORMAT="xml")


@pytest.mark.unit
class TestLoggingSetup:
    def test_explicit_settings(self):
        setup_logging(Settings(LOG_LEVEL="ERROR", LOG_FORMAT="json", ENVIRONMENT="production"))
        assert logging.getLogger().level == logging.ERROR

    def test_defaults_to_cached_settings(self):
        setup_logging()
        expected = getattr(logging, get_settings().LOG_LEVEL.upper())
        assert logging.getLogger().level == expected
