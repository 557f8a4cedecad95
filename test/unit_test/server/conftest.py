"""Fixtures for the HTTP layer tests.

The app's ``get_session`` dependency is overridden so every request opens its
own ``session_scope`` on the per-test SQLite engine.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from access_registry.core.database.session import get_session, session_scope
from access_registry.server.main import app


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process."""

    async def override_get_session():
        async with session_scope(session_factory) as db_session:
            yield db_session

    app.dependency_overrides[get_session] = override_get_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://localhost") as async_client:
            yield async_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def created_user(client, sample_user_data) -> dict:
    response = await client.post("/api/v1/users", json=sample_user_data)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def created_group(client, sample_group_data) -> dict:
    response = await client.post("/api/v1/access-groups", json=sample_group_data)
    assert response.status_code == 201
    return response.json()
