"""
Database utility functions for engine and session management.

This module provides the core utility functions for creating database engines,
session factories and schema bootstrap helpers. Built with async SQLAlchemy so
that no query ever blocks the event loop serving requests.

Functions:
- create_engine: Creates async SQLAlchemy engine with URL normalization
- create_sessionmaker: Creates async session factory with safe defaults
- create_all / drop_all: Create or drop all tables from ORM metadata (for tests/dev)
- load_relationship: Explicitly load a lazy relationship from async code
"""

from __future__ import annotations

import re
from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from . import entities  # noqa: F401  registers every table on the metadata

_POSTGRES_PREFIX = re.compile(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://")
_SQLITE_PREFIX = re.compile(r"^sqlite(?:\+[a-z0-9_]+)?://")


def normalize_url(db_url: str) -> str:
    """Rewrite a database URL so that it names an async driver.

    ``postgres://``, ``postgresql://`` and ``postgresql+psycopg2://`` become
    ``postgresql+asyncpg://``; any ``sqlite`` variant becomes ``sqlite+aiosqlite``.

    Args:
        db_url: Database connection URL

    Returns:
        The URL with its driver replaced
    """
    url = _POSTGRES_PREFIX.sub("postgresql+asyncpg://", db_url, count=1)
    return _SQLITE_PREFIX.sub("sqlite+aiosqlite://", url, count=1)


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(
    db_url: str,
    *,
    echo: bool = False,
    pool_size: Optional[int] = None,
    max_overflow: Optional[int] = None,
    **engine_kwargs: Any,
) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    The helper normalizes URLs to ensure an async driver is used. SQLite
    connections get foreign key enforcement, and an in-memory SQLite database
    is served through a ``StaticPool`` so that every session sees the same data.

    Args:
        db_url: Database connection URL
        echo: Log every SQL statement
        pool_size: Persistent pool connections (ignored for SQLite)
        max_overflow: Extra connections above ``pool_size`` (ignored for SQLite)
        **engine_kwargs: Passed through to ``create_async_engine``

    Returns:
        Configured AsyncEngine instance
    """
    url = normalize_url(db_url)
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}

    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
    else:
        if pool_size is not None:
            kwargs["pool_size"] = pool_size
        if max_overflow is not None:
            kwargs["max_overflow"] = max_overflow

    kwargs.update(engine_kwargs)
    engine = create_async_engine(url, **kwargs)

    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    ``expire_on_commit`` is disabled: after a commit, attribute access on an
    expired instance would need implicit IO, which async sessions cannot do.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata.

    This is mainly intended for tests and local development.
    Production should use Alembic migrations instead.

    Args:
        engine: Async SQLAlchemy engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def drop_all(engine: AsyncEngine) -> None:
    """Drop all tables for the current ORM metadata.

    Args:
        engine: Async SQLAlchemy engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)


async def load_relationship(session: AsyncSession, instance: SQLModel, name: str) -> Any:
    """Load a lazy relationship of ``instance`` and return it.

    Equivalent to ``await instance.awaitable_attrs.<name>`` but also reloads a
    collection that was already loaded, which is what callers want after
    membership rows were written directly.

    Args:
        session: Session the instance belongs to
        instance: Persistent entity
        name: Relationship attribute name

    Returns:
        The loaded relationship value
    """
    await session.refresh(instance, attribute_names=[name])
    return getattr(instance, name)
