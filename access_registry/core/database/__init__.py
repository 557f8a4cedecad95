"""
Database layer for Access Registry.

This package provides a unified location for all database entities and repositories.

Structure:
- entities/: Table models (users, access groups, membership links)
- repositories/: Data access layer, one repository per aggregate
- schemas/: API schema models for request/response serialization
- session.py: Global engine, session factory and session scope helpers
- utils.py: Engine, session factory and schema bootstrap functions
"""

from .base import Base, utc_now
from .session import (
    CommitPolicy,
    async_session_maker,
    dispose_engine,
    engine,
    get_session,
    init_db,
    run_concurrently,
    session_scope,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    drop_all,
    load_relationship,
)

__all__ = [
    "Base",
    "CommitPolicy",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "dispose_engine",
    "drop_all",
    "engine",
    "get_session",
    "init_db",
    "load_relationship",
    "run_concurrently",
    "session_scope",
    "utc_now",
]
