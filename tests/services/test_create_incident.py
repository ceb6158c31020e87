"""Create Incident — POST /new-incident end to end against a SQLite file.

Invariants:
    - A valid body inserts exactly one row and answers plain text OK
    - Stored date_time uses `/`; listing shows it back with `-`
    - Invalid bodies never reach the store
"""

import pytest


async def test_create_inserts_one_row(client, store, incident_body, count_rows):
    res = await client.post("/new-incident", json=incident_body)
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text == "OK"
    assert await count_rows() == 1


async def test_create_stores_canonical_date_time(client, store, incident_body):
    await client.post("/new-incident", json=incident_body)
    rows = await store.select(
        "SELECT date_time FROM Incidents WHERE case_number = ?",
        [incident_body["case_number"]],
    )
    assert rows == [{"date_time": "2024/03/15 13:45:00"}]


async def test_create_then_list_round_trip(client, seed_incidents, incident_body):
    await client.post("/new-incident", json=incident_body)
    res = await client.get("/incidents", params={"code": "600", "grid": "87"})
    rows = res.json()
    assert len(rows) == 1
    assert rows[0]["case_number"] == "24000001"
    assert rows[0]["date_time"] == "2024-03-15 13:45:00"


async def test_created_row_sorts_with_legacy_rows(client, seed_incidents, incident_body):
    await client.post("/new-incident", json={**incident_body, "date": "2019-10-30", "time": "00:00:01"})
    res = await client.get("/incidents", params={"start_date": "2019-10-30"})
    assert [r["case_number"] for r in res.json()] == [
        "19000001", "19000002", "24000001",
    ]


async def test_create_missing_block_fails_validation(client, incident_body, count_rows):
    body = {k: v for k, v in incident_body.items() if k != "block"}
    res = await client.post("/new-incident", json=body)
    assert res.status_code == 400
    assert res.text == "Validation Error: block: Field required"
    assert await count_rows() == 0


@pytest.mark.parametrize("field, value", [
    ("date", "2024/03/15"),
    ("time", "13:45"),
    ("code", -600),
    ("case_number", ""),
])
async def test_create_malformed_field_fails_validation(
    client, incident_body, count_rows, field, value,
):
    res = await client.post("/new-incident", json={**incident_body, field: value})
    assert res.status_code == 400
    assert res.text.startswith(f"Validation Error: {field}:")
    assert await count_rows() == 0


async def test_create_without_body_fails_validation(client, count_rows):
    res = await client.post("/new-incident")
    assert res.status_code == 400
    assert res.text.startswith("Validation Error:")
    assert await count_rows() == 0


async def test_create_duplicate_case_number_returns_store_error(
    client, incident_body, count_rows,
):
    await client.post("/new-incident", json=incident_body)
    res = await client.post("/new-incident", json=incident_body)
    assert res.status_code == 500
    assert res.text == "UNIQUE constraint failed: Incidents.case_number"
    assert await count_rows() == 1


@pytest.mark.parametrize("field", ["code", "police_grid", "neighborhood_number"])
async def test_create_integer_past_sqlite_range_fails_validation(
    client, incident_body, count_rows, field,
):
    res = await client.post("/new-incident", json={**incident_body, field: 2**64})
    assert res.status_code == 400
    assert res.text.startswith(f"Validation Error: {field}:")
    assert await count_rows() == 0


@pytest.mark.parametrize("field", ["code", "police_grid", "neighborhood_number"])
async def test_create_boolean_number_fails_validation(
    client, incident_body, count_rows, field,
):
    res = await client.post("/new-incident", json={**incident_body, field: True})
    assert res.status_code == 400
    assert res.text.startswith(f"Validation Error: {field}:")
    assert await count_rows() == 0
