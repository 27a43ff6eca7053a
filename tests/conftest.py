"""
Pytest configuration and shared fixtures for the web tools tests.
"""

import os
from unittest.mock import patch

import pytest

from webtools import create_app
from webtools.config import Settings, reset_global_settings

TEST_ENV = {
    "SECRET_KEY": "test-secret-key-123",
    "APP_ENV": "testing",
    "FUNCTIONS_BASE_URL": "https://functions.example.test/v1",
    "FUNCTIONS_API_KEY": "test-functions-key",
    "HTTP_MAX_RETRIES": "0",
}


@pytest.fixture(autouse=True)
def test_environment():
    """Run every test against a known environment and fresh global settings."""
    reset_global_settings()
    with patch.dict(os.environ, TEST_ENV, clear=True):
        yield
    reset_global_settings()


@pytest.fixture
def settings():
    """Settings built from the test environment only."""
    return Settings(_env_file=None)


@pytest.fixture
def app():
    """Create a Flask app for testing."""
    return create_app("testing")


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()
