"""Tests for shared/config.py."""

import os
from datetime import timedelta
from unittest.mock import patch

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Hifz API"
        assert settings.port == 8000
        assert settings.premium_window == timedelta(days=30)
        assert settings.require_confirmed_email is True
        assert settings.trial_game_limit == 3
        assert settings.trial_analysis_limit == 1
        assert settings.license_verify_url == "https://api.gumroad.com/v2/licenses/verify"

    def test_loads_from_prefixed_env(self):
        with patch.dict(os.environ, {
            "HIFZ_DEBUG": "true",
            "HIFZ_GUMROAD_PRODUCT_ID": "prod-123",
            "HIFZ_PREMIUM_WINDOW_DAYS": "7",
        }):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.gumroad_product_id == "prod-123"
            assert settings.premium_window == timedelta(days=7)

    def test_admin_emails_normalized(self):
        with patch.dict(os.environ, {
            "HIFZ_ADMIN_EMAILS": '[" Owner@Example.com ", "", "ops@example.com"]',
        }):
            settings = Settings(_env_file=None)
            assert settings.admin_allowlist == frozenset({"owner@example.com", "ops@example.com"})


class TestGetSettings:
    def test_get_settings_caches(self):
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert isinstance(settings1, Settings)
        assert settings1 is settings2
