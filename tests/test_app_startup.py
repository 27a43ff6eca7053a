"""Tests for Flask application startup with configuration."""

import logging
import os
from unittest.mock import patch

import pytest

from webtools import create_app
from webtools.config import reset_global_settings


class TestAppStartup:
    """Test cases for Flask application startup."""

    def test_app_creation_with_valid_config(self):
        """Test that app creates successfully with valid configuration."""
        reset_global_settings()

        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            app = create_app()

            assert app is not None
            assert app.config["SECRET_KEY"] == "valid-secret-key-123"
            assert app.config["APP_ENV"] == "development"

    def test_app_creation_fails_with_placeholder_secret_key(self):
        """Test that app creation fails with placeholder SECRET_KEY."""
        reset_global_settings()

        with patch.dict(
            os.environ, {"SECRET_KEY": "your-secret-key-here-change-in-production"}, clear=True
        ):
            with pytest.raises(Exception) as exc_info:
                create_app()

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_app_applies_log_level(self):
        """Test that LOG_LEVEL is applied to the application logger."""
        reset_global_settings()

        with patch.dict(
            os.environ, {"SECRET_KEY": "valid-secret-key-123", "LOG_LEVEL": "ERROR"}, clear=True
        ):
            app = create_app()
            assert app.logger.level == logging.ERROR

    def test_app_debug_mode_based_on_environment(self):
        """Test that debug mode is set based on APP_ENV."""
        reset_global_settings()
        with patch.dict(
            os.environ, {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "development"}, clear=True
        ):
            app = create_app()
            assert app.config["DEBUG"] is True

        reset_global_settings()
        with patch.dict(
            os.environ, {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "production"}, clear=True
        ):
            app = create_app()
            assert app.config["DEBUG"] is False
            assert app.config["TESTING"] is False

    def test_config_name_overrides_app_env(self):
        """Test that an explicit config name wins over APP_ENV."""
        app = create_app("testing")
        assert app.config["TESTING"] is True
        assert app.config["DEBUG"] is False

    def test_blueprints_registered(self):
        """Test that health and tools blueprints are registered."""
        app = create_app()
        assert "health" in app.blueprints
        assert "tools" in app.blueprints
