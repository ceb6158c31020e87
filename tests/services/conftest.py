"""Service test fixtures — file-backed SQLite store + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path with the Incidents table
    - get_store dependency overridden to use the test store
    - Lifespan is not run by ASGITransport: app.state is never touched

Design Decisions:
    - File database over :memory: — every pooled connection sees the same data
"""

import pytest
from httpx import ASGITransport, AsyncClient

from crime_api.api.dependencies import get_store
from crime_api.infrastructure.database import IncidentStore
from crime_api.main import app

INSERT_SQL = (
    "INSERT INTO Incidents (case_number, date_time, code, incident, "
    "police_grid, neighborhood_number, block) VALUES (?,?,?,?,?,?,?)"
)


@pytest.fixture
async def store(tmp_path):
    store = IncidentStore(f"sqlite+aiosqlite:///{tmp_path / 'incidents.sqlite3'}")
    await store.create_tables()
    yield store
    await store.dispose()


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def incident_body():
    """A complete, valid POST /new-incident body."""
    return {
        "case_number": "24000001",
        "date": "2024-03-15",
        "time": "13:45:00",
        "code": 600,
        "incident": "Theft",
        "police_grid": 87,
        "neighborhood_number": 7,
        "block": "98X UNIVERSITY AV W",
    }


@pytest.fixture
async def seed_incidents(store):
    """Insert legacy-format rows directly, bypassing the API."""
    rows = [
        ("19000001", "2019/10/30 23:57:08", 9954, "Proactive Police Visit", 87, 7, "THOMAS AV  & VICTORIA"),
        ("19000002", "2019/10/30 23:53:04", 9954, "Proactive Police Visit", 112, 8, "98X UNIVERSITY AV W"),
        ("19000003", "2019/10/29 22:18:05", 600, "Theft", 88, 7, "SELBY AV & MACKUBIN"),
        ("19000004", "2019/10/29 21:50:37", 700, "Auto Theft", 10, 1, "HYACINTH AV E & FOREST"),
        ("19000005", "2019/10/28 08:14:59", 600, "Theft", 119, 10, "27X LARPENTEUR AV W"),
        ("19000006", "2019/10/01 00:05:00", 3100, "Graffiti", 87, 7, "DALE ST N & CHARLES"),
    ]
    for row in rows:
        await store.run(INSERT_SQL, row)
    return rows


@pytest.fixture
def count_rows(store):
    """Async callable returning the current number of Incidents rows."""
    async def _count() -> int:
        rows = await store.select("SELECT COUNT(*) AS n FROM Incidents")
        return rows[0]["n"]
    return _count
