"""
Unit tests for FastAPI application lifespan management.

The lifespan context is entered directly with the database helpers patched,
so the global engine is never touched.
"""

from unittest.mock import AsyncMock, patch

from access_registry.server import main


async def test_startup_creates_tables_when_enabled(monkeypatch):
    monkeypatch.setattr(main.settings, "auto_create_tables", True)

    with patch.object(main, "init_db", new=AsyncMock()) as init_db, patch.object(
        main, "dispose_engine", new=AsyncMock()
    ) as dispose_engine:
        async with main.lifespan(main.app):
            init_db.assert_awaited_once()
            dispose_engine.assert_not_awaited()

    dispose_engine.assert_awaited_once()


async def test_startup_skips_tables_by_default(monkeypatch):
    monkeypatch.setattr(main.settings, "auto_create_tables", False)

    with patch.object(main, "init_db", new=AsyncMock()) as init_db, patch.object(
        main, "dispose_engine", new=AsyncMock()
    ) as dispose_engine:
        async with main.lifespan(main.app):
            pass

    init_db.assert_not_awaited()
    dispose_engine.assert_awaited_once()


def test_routes_are_registered():
    paths = set(main.app.openapi()["paths"])

    assert {"/health", "/version", "/api/v1/users", "/api/v1/access-groups/{group_id}/members"} <= paths
