"""Health & Readiness — liveness always up, readiness tracks the store."""

from httpx import ASGITransport, AsyncClient

from crime_api.api.dependencies import get_store
from crime_api.config import get_settings
from crime_api.infrastructure.database import IncidentStore
from crime_api.main import app, lifespan


async def test_liveness(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_reachable_store(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json() == {"status": "ready", "checks": {"database": "healthy"}}


async def test_readiness_with_unreachable_store(tmp_path):
    broken = IncidentStore(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'x.sqlite3'}",
    )
    app.dependency_overrides[get_store] = lambda: broken
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        res = await c.get("/health/ready")
    app.dependency_overrides.clear()
    await broken.dispose()
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_lifespan_opens_store_on_app_state(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'boot.sqlite3'}")
    monkeypatch.setenv("CREATE_TABLES", "true")
    get_settings.cache_clear()
    try:
        async with lifespan(app):
            store = app.state.store
            assert store.database_name == "boot.sqlite3"
            assert await store.select("SELECT * FROM Incidents") == []
    finally:
        del app.state.store
        get_settings.cache_clear()
