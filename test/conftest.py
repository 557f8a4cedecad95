from __future__ import annotations

import os
from pathlib import Path
from typing import AsyncGenerator

import pytest
from dotenv import load_dotenv

TEST_ROOT = Path(__file__).resolve().parent
# Load test/.env first, then fall back to test/.env.example for defaults
load_dotenv(TEST_ROOT / ".env", override=False)
load_dotenv(TEST_ROOT / ".env.example", override=False)

# The global engine is built at import time, point it at SQLite before anything imports it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOGFIRE_ENABLED", "false")

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402

from access_registry.core.database.utils import (  # noqa: E402
    create_all,
    create_engine,
    create_sessionmaker,
)
from test.settings import test_settings  # noqa: E402


@pytest.fixture(scope="session")
def test_config():
    """Fixture providing test configuration from Pydantic settings model.

    Returns:
        TestSettings: Test configuration with all environment variables loaded
    """
    return test_settings


@pytest.fixture
async def engine(test_config) -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with every table created, one per test."""
    db_engine = create_engine(test_config.database_url, echo=test_config.echo_sql)
    await create_all(db_engine)
    try:
        yield db_engine
    finally:
        await db_engine.dispose()


@pytest.fixture
async def file_engine(tmp_path, test_config) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine, for tests that need separate connections per session."""
    db_engine = create_engine(f"sqlite:///{tmp_path / 'registry.db'}", echo=test_config.echo_sql)
    await create_all(db_engine)
    try:
        yield db_engine
    finally:
        await db_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(engine)


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session bound to the per-test engine. Tests commit explicitly when they need to."""
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
def sample_user_data() -> dict:
    """Sample user data for testing."""
    return {
        "email": "ada@example.com",
        "full_name": "Ada Lovelace",
    }


@pytest.fixture
def sample_group_data() -> dict:
    """Sample access group data for testing."""
    return {
        "name": "billing-admins",
        "description": "Can issue refunds and edit invoices",
    }
