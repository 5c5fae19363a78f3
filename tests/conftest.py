"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from announcement_bridge.app import app
from announcement_bridge.config import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached process-wide; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)
