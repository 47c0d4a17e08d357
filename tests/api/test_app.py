"""
Tests for application wiring: meta endpoints, error envelopes, middleware.
"""

import httpx
import pytest

from postr.config import PostrConfig, ServerConfig


async def test_root(client):
    response = await client.get("/")

    data = response.json()["data"]
    assert data["name"] == "Postr API"
    assert data["endpoints"]["graphql"] == "/graphql"


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["data"] == {
        "status": "healthy",
        "database": {"type": "local", "dialect": "sqlite", "healthy": True},
    }


async def test_health_unhealthy_returns_503(client, adapter):
    await adapter.close()

    response = await client.get("/health")

    assert response.status_code == 503
    details = response.json()["error"]["details"]
    assert details["database"]["healthy"] is False


async def test_rest_health(client):
    response = await client.get("/api/health")

    assert response.json()["data"]["status"] == "ok"


async def test_unknown_route(client):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Endpoint not found: GET /api/nothing-here"


async def test_request_id_headers(client):
    response = await client.get("/", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"
    assert response.headers["X-Response-Time"].endswith("ms")

    generated = await client.get("/")
    assert len(generated.headers["X-Request-ID"]) == 36


async def test_cors_for_local_frontend(adapter):
    from postr_api.app import create_app

    app = create_app(config=PostrConfig(), adapter=adapter)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        response = await c.get("/", headers={"Origin": "http://localhost:5173"})

    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


async def test_internal_error_details_only_in_development(adapter, services, blog):
    from postr_api.app import create_app

    payload = {"name": "Dup", "slug": "development"}

    for environment, expect_details in (("development", True), ("production", False)):
        app = create_app(
            config=PostrConfig(server=ServerConfig(environment=environment)),
            adapter=adapter,
        )
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/api/categories", json=payload)

        error = response.json()["error"]
        assert response.status_code == 500
        assert error["message"] == "Internal server error"
        assert ("details" in error) is expect_details


async def test_lifespan_initializes_and_closes(tmp_path):
    from postr.config import DatabaseConfig
    from postr_api.app import create_app

    config = PostrConfig(database=DatabaseConfig(sqlite_path=str(tmp_path / "life.db")))
    app = create_app(config=config)

    async with app.router.lifespan_context(app):
        adapter = app.state.adapter
        assert adapter.is_initialized
        assert await adapter.fetchval("SELECT COUNT(*) FROM users") == 0

    assert not adapter.is_initialized


async def test_lifespan_closes_adapter_when_schema_fails(tmp_path, monkeypatch):
    from postr.db.sqlite import SQLiteAdapter
    from postr.errors import DatabaseError
    from postr_api.app import create_app

    adapter = SQLiteAdapter(str(tmp_path / "broken.db"))

    async def fail():
        raise DatabaseError("schema failed")

    monkeypatch.setattr(adapter, "ensure_schema", fail)
    app = create_app(config=PostrConfig(), adapter=adapter)

    with pytest.raises(DatabaseError, match="schema failed"):
        async with app.router.lifespan_context(app):
            pass

    assert not adapter.is_initialized
