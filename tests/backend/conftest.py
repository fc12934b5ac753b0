"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with services wired to the mock
database and a TestClient whose dependencies point at it.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def user_service(user_repository, event_repository):
    from users_svc.services.user_service import UserService
    return UserService(user_repository, event_repository)


@pytest.fixture
def auth_service(user_repository, secret_resolver):
    from users_svc.services.auth_service import AuthenticationService
    return AuthenticationService(user_repository, secret_resolver)


@pytest.fixture
def failing_event_repository():
    """Event log whose appends always fail."""
    from users_svc.core.exceptions import PersistenceError

    events = AsyncMock()
    events.append_event.side_effect = PersistenceError("Failed to append event in Events")
    return events


@pytest.fixture
def stored_events(mock_users_db):
    """Helper returning every event document written so far."""
    async def _events() -> list[dict]:
        return await mock_users_db["Events"].find({}).to_list(length=None)
    return _events


# =============================================================================
# App Override Helpers
# =============================================================================

@pytest.fixture
def app_with_mocks(mock_users_db, secret_resolver):
    """
    The FastAPI app with repositories and secrets bound to the mock database.

    Startup runs against the mock database too, so the default
    administrator is seeded before the first request.
    """
    from users_svc.core.secrets import get_secret_resolver
    from users_svc.database.event_store import EventRepository
    from users_svc.database.repository import UserRepository
    from users_svc.dependencies.services import get_event_repository, get_user_repository
    from users_svc.main import app

    app.dependency_overrides[get_user_repository] = lambda: UserRepository(mock_users_db)
    app.dependency_overrides[get_event_repository] = lambda: EventRepository(mock_users_db)
    app.dependency_overrides[get_secret_resolver] = lambda: secret_resolver

    with patch("users_svc.main.get_database") as mock_get_database:
        mock_get_database.return_value = mock_users_db
        yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(app_with_mocks):
    """TestClient using the mocked app."""
    from fastapi.testclient import TestClient

    with TestClient(app_with_mocks) as c:
        yield c


# =============================================================================
# Token Helpers
# =============================================================================

@pytest.fixture
def login():
    """Log in through the API and return the bearer header."""
    def _login(client, email: str, password: str) -> dict:
        response = client.post(
            "/api/authentication/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login


@pytest.fixture
def admin_headers(client, login, settings):
    """Bearer header for the seeded default administrator."""
    return login(client, settings.admin_email, settings.admin_password)


@pytest.fixture
def user_headers(client, login, test_user_data):
    """Bearer header for a freshly registered standard user."""
    response = client.post("/api/authentication/register", json=test_user_data)
    assert response.status_code == 201, response.text
    return login(client, test_user_data["email"], test_user_data["password"])


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in str(data["detail"]).lower()
    return _assert
