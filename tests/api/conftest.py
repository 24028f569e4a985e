"""
API test fixtures.

Builds the real application and overrides settings so bearer tokens and the
cron secret are verifiable without environment variables.
"""

import pytest
from fastapi.testclient import TestClient

from fairform.api.deps import get_settings_dependency
from fairform.main import create_app


@pytest.fixture
def app(settings):
    """Application with test settings injected."""
    app = create_app()
    app.dependency_overrides[get_settings_dependency] = lambda: settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Client that returns 500 responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers(make_token) -> dict[str, str]:
    """Authorization header for user-1."""
    return {"Authorization": f"Bearer {make_token('user-1')}"}
