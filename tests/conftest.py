"""
Global test fixtures for the users service.

This module provides shared fixtures for all tests including:
- Local JWT/Mongo configuration (no parameter store access)
- Mock MongoDB (mongomock-motor)
- A fake parameter store for secret resolution tests
- Test user payloads
"""

import os
import sys
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

# Local configuration must be in place before settings are first cached
os.environ.setdefault("ENVIRONMENT", "Development")
os.environ.setdefault("USE_SSM", "false")
os.environ.setdefault("SSM_FALLBACK_ENABLED", "false")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017/users_test")
os.environ.setdefault("JWT_KEY", "test-signing-key-that-is-long-enough-for-hs256")
os.environ.setdefault("JWT_ISSUER", "users-svc-tests")
os.environ.setdefault("JWT_AUDIENCE", "users-svc-clients")
os.environ.setdefault("ADMIN_PASSWORD", "Admin@123")


# =============================================================================
# Parameter Store Fixtures
# =============================================================================

class FakeParameterStore:
    """
    In-memory stand-in for the SSM parameter store.

    Records every lookup as ``(name, decrypt)`` so tests can assert on
    which sources were consulted.
    """

    def __init__(self, values: Optional[dict] = None):
        self.values = dict(values or {})
        self.calls: list[tuple[str, bool]] = []

    def get(self, name: str, decrypt: bool = False) -> Optional[str]:
        self.calls.append((name, decrypt))
        return self.values.get(name)


@pytest.fixture
def fake_parameter_store():
    """Factory for parameter stores pre-loaded with values."""
    def _make(values: Optional[dict] = None) -> FakeParameterStore:
        return FakeParameterStore(values)
    return _make


@pytest.fixture
def settings():
    """Application settings built from the test environment."""
    from users_svc.config import get_settings
    return get_settings()


@pytest.fixture
def secret_resolver(settings):
    """Resolver that only ever reads local configuration."""
    from users_svc.core.secrets import SecretResolver
    return SecretResolver(settings, parameter_store=FakeParameterStore())


@pytest.fixture
def jwt_secrets(secret_resolver):
    """Resolved signing key, issuer and audience."""
    return secret_resolver.resolve()


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest.fixture
def mock_users_db(mock_async_mongo_client):
    """Provide mock users database."""
    return mock_async_mongo_client["users_test"]


@pytest_asyncio.fixture
async def indexed_users_db(mock_users_db):
    """Mock users database with the application indexes."""
    from users_svc.database.indexes import create_indexes
    await create_indexes(mock_users_db)
    yield mock_users_db


@pytest.fixture
def user_repository(mock_users_db):
    from users_svc.database.repository import UserRepository
    return UserRepository(mock_users_db)


@pytest.fixture
def event_repository(mock_users_db):
    from users_svc.database.event_store import EventRepository
    return EventRepository(mock_users_db)


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for registration."""
    return {
        "name": "Alice",
        "email": "alice@x.com",
        "password": "Secret@123",
    }


@pytest.fixture
def test_admin_data() -> dict:
    """Administrator data."""
    return {
        "name": "Root",
        "email": "root@example.com",
        "password": "Admin@123",
    }


@pytest.fixture
def stored_user():
    """A stored standard user entity."""
    from users_svc.core.security import hash_password
    from users_svc.models.user import User, UserRole

    return User(
        id="507f1f77bcf86cd799439011",
        name="Alice",
        email="alice@x.com",
        hashed_password=hash_password("Secret@123"),
        role=UserRole.USER,
    )
