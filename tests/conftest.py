"""
Pytest configuration and shared fixtures.

This module provides fixtures that are available to all test modules.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.config.settings import AppSettings, get_client_settings, get_settings
from src.core.credential_store import CredentialStore
from src.domain.credentials import Credentials

TEST_ENCRYPTION_KEY = "0123456789abcdef0123456789abcdef"
ALLOWED_ORIGIN = "http://localhost:5173"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """
    Clear settings caches before each test.

    This ensures each test gets fresh settings.
    """
    get_settings.cache_clear()
    get_client_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_client_settings.cache_clear()


@pytest.fixture
def credentials_path(tmp_path: Path) -> Path:
    """Location of the encrypted credentials file for a test."""
    return tmp_path / "store" / ".credentials"


@pytest.fixture
def app_settings(credentials_path: Path) -> AppSettings:
    """
    Proxy settings isolated from the developer's environment and .env file.

    Returns:
        AppSettings pointing at a temporary credentials file
    """
    return AppSettings(
        _env_file=None,
        environment="test",
        allowed_origins="http://localhost:5173,http://localhost:5180",
        encryption_key=TEST_ENCRYPTION_KEY,
        credentials_path=credentials_path,
        log_level="DEBUG",
    )


@pytest.fixture
def credential_store(app_settings: AppSettings) -> CredentialStore:
    return CredentialStore(app_settings.credentials_path, app_settings.encryption_key)


@pytest.fixture
def sample_credentials() -> Credentials:
    """A complete, obviously fake credentials record."""
    return Credentials(
        client_id="test-client-id.apps.googleusercontent.com",
        client_secret="test-client-secret",
        developer_token="test-developer-token",
        refresh_token="1//test-refresh-token",
        manager_id="123-456-7890",
    )


@pytest.fixture
def app(app_settings: AppSettings):
    """FastAPI app built from the isolated settings."""
    return create_app(app_settings)


@pytest.fixture
def client(app) -> TestClient:
    """Test client for the proxy API."""
    return TestClient(app)
