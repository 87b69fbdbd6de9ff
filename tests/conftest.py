# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, Mock
from typing import Generator

from main import create_app
from core.rate_limiter import reset_rate_limits
from models.enums import Role
from models.identity import Identity, Profile


def make_identity(role: Role, profile_id: int = 1) -> Identity:
    """Identity for a user holding `role`."""
    name = role.value.lower()
    return Identity(
        access_token=f"{name}-token",
        profile=Profile(
            id=profile_id,
            auth_user_id=f"{name}-auth-id",
            email=f"{name}@dockyard.co.id",
            role=role,
            name=name.title(),
        ),
    )


def profile_row(role: str = "PPIC", auth_user_id: str = "auth-uid-1") -> dict:
    """A raw row as PostgREST returns it from the profiles table."""
    return {
        "id": 7,
        "auth_user_id": auth_user_id,
        "email": "budi@dockyard.co.id",
        "name": "Budi",
        "company": "PT Dockyard",
        "role": role,
        "created_at": "2025-03-01T08:00:00+00:00",
        "updated_at": "2025-03-01T08:00:00+00:00",
        "deleted_at": None,
    }


def profile_query(client: MagicMock) -> MagicMock:
    """The .execute mock at the end of the profile lookup chain."""
    return (
        client.table.return_value
        .select.return_value
        .eq.return_value
        .is_.return_value
        .limit.return_value
        .execute
    )


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def as_identity(app):
    """
    Make every request in the test run as the given identity:

        as_identity(make_identity(Role.MANAGER))
    """
    from dependencies.auth import get_current_identity, get_optional_identity

    def _set(identity: Identity):
        app.dependency_overrides[get_current_identity] = lambda: identity
        app.dependency_overrides[get_optional_identity] = lambda: identity
        return identity

    yield _set
    app.dependency_overrides.clear()


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client with a valid session for 'auth-uid-1'."""
    mock_client = MagicMock()
    mock_client.auth.get_user.return_value = Mock(user=Mock(id="auth-uid-1"))
    return mock_client


@pytest.fixture(autouse=True)
def reset_limits():
    """Reset login throttling before each test."""
    reset_rate_limits()
    yield
    reset_rate_limits()
