"""
Global database session and engine management.

This module owns the process-wide ``AsyncEngine`` and ``async_sessionmaker``
and the helpers every caller uses to obtain a session:

- ``session_scope``: async context manager, one session and one transaction.
- ``get_session``: the FastAPI dependency built on ``session_scope``.
- ``run_concurrently``: fan work out over tasks, each with its own session.

An ``AsyncSession`` is not safe to share between concurrently running
coroutines. Every task that touches the database opens its own scope.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, nullcontext
from enum import Enum
from typing import Any, AsyncGenerator, AsyncIterator, Awaitable, Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from access_registry.core.logging_config import get_logger
from access_registry.core.monitoring import log_transaction_rollback
from access_registry.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

_database = settings.database

# Create global engine and session factory
engine = create_engine(
    _database.url,
    echo=_database.echo,
    pool_size=_database.pool_size,
    max_overflow=_database.max_overflow,
)
async_session_maker = create_sessionmaker(engine)


class CommitPolicy(str, Enum):
    """How a session scope ends its transaction."""

    UNIT_OF_WORK = "unit_of_work"
    """Commit once when the scope exits without an exception."""

    EXPLICIT = "explicit"
    """Never commit automatically; uncommitted work is rolled back at exit."""


@asynccontextmanager
async def session_scope(
    factory: Optional[async_sessionmaker[AsyncSession]] = None,
    *,
    policy: CommitPolicy = CommitPolicy.UNIT_OF_WORK,
) -> AsyncIterator[AsyncSession]:
    """Provide a transactional scope around a series of operations.

    Args:
        factory: Session factory to use, defaults to the global ``async_session_maker``
        policy: Commit policy applied when the block exits normally

    Yields:
        A fresh ``AsyncSession`` owned by this scope

    Any exception raised inside the block rolls the transaction back and is
    re-raised unchanged. The session is closed in every case.
    """
    session_factory = factory or async_session_maker
    async with session_factory() as session:
        try:
            yield session
            if policy is CommitPolicy.UNIT_OF_WORK:
                await session.commit()
                logger.debug("Session scope committed")
            elif session.in_transaction():
                await session.rollback()
                logger.debug("Session scope discarded uncommitted work (explicit commit policy)")
        except Exception as exc:
            await session.rollback()
            logger.warning(f"Session scope rolled back after {type(exc).__name__}: {exc}")
            log_transaction_rollback(type(exc).__name__, str(exc))
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Each request gets its own session and its own transaction, committed when
    the endpoint returns and rolled back when it raises.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with session_scope() as session:
        yield session


def _shares_one_connection(factory: async_sessionmaker[AsyncSession]) -> bool:
    bind = factory.kw.get("bind")
    return isinstance(bind, AsyncEngine) and isinstance(bind.pool, StaticPool)


async def run_concurrently(
    *operations: Callable[[AsyncSession], Awaitable[Any]],
    factory: Optional[async_sessionmaker[AsyncSession]] = None,
    policy: CommitPolicy = CommitPolicy.UNIT_OF_WORK,
) -> List[Any]:
    """Run ``operations`` concurrently, giving each one its own session scope.

    Every operation runs to completion and commits or rolls back on its own.
    If any of them failed, the first failure in argument order is re-raised
    once all of them have finished.

    When the factory's engine hands every session the same connection (an
    in-memory SQLite database on a ``StaticPool``), the scopes run one after
    another. Interleaved transactions on one connection would roll back each
    other's work.

    Args:
        *operations: Callables taking an ``AsyncSession`` and returning an awaitable
        factory: Session factory, defaults to the global ``async_session_maker``
        policy: Commit policy for every scope

    Returns:
        The operations' results, in argument order
    """

    session_factory = factory or async_session_maker
    serialize = asyncio.Lock() if _shares_one_connection(session_factory) else nullcontext()

    async def _run(operation: Callable[[AsyncSession], Awaitable[Any]]) -> Any:
        async with serialize:
            async with session_scope(session_factory, policy=policy) as session:
                return await operation(session)

    results = await asyncio.gather(*(_run(operation) for operation in operations), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


async def init_db(db_engine: Optional[AsyncEngine] = None) -> None:
    """
    Initialize the database.

    Creates all tables registered on the SQLModel metadata.
    NOTE: In production, Alembic migrations should be used instead of this function.

    Args:
        db_engine: Engine to create the tables on, defaults to the global engine
    """
    target = db_engine or engine
    await create_all(target)
    logger.info(f"Database tables created on {target.url.render_as_string(hide_password=True)}")


async def dispose_engine() -> None:
    """Close every pooled connection of the global engine."""
    await engine.dispose()
    logger.info("Database engine disposed")
