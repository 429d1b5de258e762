"""Service test fixtures — fake store, real repository/service, FastAPI test client.

Invariants:
    - Every test gets a fresh FakeUserStore
    - get_db_manager overridden so routes build the real service over the fake store
    - Lifespan does not run under ASGITransport; no engine is ever created

Design Decisions:
    - Override get_db_manager, not get_user_service: route tests exercise
      deps.py, UserService, PostgresUserRepository, and store_result end to end
"""

import pytest
from httpx import ASGITransport, AsyncClient

from registration_api.infrastructure.database import get_db_manager
from registration_api.infrastructure.user_repository import PostgresUserRepository
from registration_api.main import app
from registration_api.services.user_service import UserService
from tests.services.fake_store import FakeSessionManager, FakeUserStore


@pytest.fixture
def store():
    return FakeUserStore()


@pytest.fixture
def session_manager(store):
    return FakeSessionManager(store)


@pytest.fixture
def repository(session_manager):
    return PostgresUserRepository(session_manager)


@pytest.fixture
def service(repository):
    return UserService(repository)


@pytest.fixture
async def client(session_manager):
    """FastAPI test client with the session manager overridden."""
    app.dependency_overrides[get_db_manager] = lambda: session_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def jane():
    return {
        "fullName": "Jane Doe",
        "email": "jane@example.com",
        "phone": "+15551234567",
        "password": "secret1",
    }
