from __future__ import annotations

from access_registry.server.core import constant


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_database_health(client):
    response = await client.get("/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "reachable"}


async def test_version(client):
    response = await client.get("/version")

    assert response.json() == {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}


async def test_responses_carry_process_time(client):
    response = await client.get("/health")

    assert float(response.headers["X-Process-Time"]) >= 0
