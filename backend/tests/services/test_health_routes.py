"""Health probes, error handlers, and OpenAPI exposure."""

from registration_api.infrastructure import database
from registration_api.infrastructure.database import get_db_manager
from registration_api.main import app


async def test_liveness_always_200(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_503_without_database(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json() == {"status": "not_ready", "reason": "database_unavailable"}


async def test_readiness_200_when_database_healthy(client, monkeypatch):
    class _Healthy:
        async def health_check(self):
            return True

    monkeypatch.setattr(database, "db_manager", _Healthy())
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_uninitialized_database_is_503_envelope(client, monkeypatch):
    app.dependency_overrides.pop(get_db_manager, None)
    monkeypatch.setattr(database, "db_manager", None)

    res = await client.get("/api/users")

    assert res.status_code == 503
    assert res.json() == {
        "success": False,
        "message": "Database connect failed: Database not initialized",
        "data": None,
    }


async def test_openapi_lists_user_routes(client):
    res = await client.get("/openapi.json")
    assert res.status_code == 200
    paths = res.json()["paths"]
    assert "/api/users" in paths
    assert "/api/users/{user_id}" in paths
