"""Unit tests for configuration module."""

import os
from unittest.mock import patch

from printshop.core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings class."""

    def test_settings_loads_from_environment(self) -> None:
        """Test that Settings loads values from environment variables."""
        env_vars = {
            "APP_NAME": "test-app",
            "APP_ENV": "testing",
            "DEBUG": "true",
            "PORT": "9000",
            "UPLOAD_DIR": "/tmp/designs",
            "ORDERS_FILE": "/tmp/orders.json",
            "ORDER_ID_START": "5000",
            "ADMIN_EMAIL": "ops@example.com",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_name == "test-app"
            assert settings.app_env == "testing"
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.upload_dir == "/tmp/designs"
            assert settings.orders_file == "/tmp/orders.json"
            assert settings.order_id_start == 5000
            assert settings.admin_email == "ops@example.com"

    def test_settings_default_values(self) -> None:
        """Test that default values are applied correctly."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_name == "printshop-backend"
            assert settings.app_env == "development"
            assert settings.debug is False
            assert settings.port == 3000
            assert settings.order_id_start == 1000
            assert settings.max_design_file_size == 10 * 1024 * 1024
            assert settings.resend_api_key == ""

    def test_settings_cors_origins_list(self) -> None:
        """Test that CORS origins are correctly parsed into a list."""
        env_vars = {"CORS_ORIGINS": "http://localhost:3000, http://example.com , ,http://test.com"}

        with patch.dict(os.environ, env_vars, clear=True):
            origins = Settings(_env_file=None).cors_origins_list

            assert origins == ["http://localhost:3000", "http://example.com", "http://test.com"]

    def test_settings_is_production_property(self) -> None:
        """Test the is_production property."""
        assert Settings(_env_file=None, app_env="production").is_production is True
        assert Settings(_env_file=None, app_env="development").is_production is False

    def test_email_configured_only_with_api_key(self) -> None:
        """Test that email counts as configured only when a Resend key is set."""
        assert Settings(_env_file=None, resend_api_key="").is_email_configured is False
        assert Settings(_env_file=None, resend_api_key="re_test_key").is_email_configured is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_get_settings_returns_cached_instance(self) -> None:
        """Test that get_settings returns the same instance."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
