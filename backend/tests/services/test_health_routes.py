"""Health Routes — liveness always 200, readiness follows the database."""

from skillbridge.infrastructure.database import find_db_manager
from skillbridge.main import app


async def test_liveness(client):
    res = await client.get("/api/v1/health/")

    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")

    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_unknown_route_uses_error_envelope(client):
    res = await client.get("/api/v1/nowhere")

    assert res.status_code == 404
    assert res.json()["success"] is False
    assert res.json()["error"]["code"] == "NOT_FOUND"


async def test_readiness_before_startup_returns_503(client):
    app.dependency_overrides[find_db_manager] = lambda: None

    res = await client.get("/api/v1/health/ready")

    assert res.status_code == 503
    assert res.json() == {"status": "not_ready", "reason": "database_not_initialized"}
