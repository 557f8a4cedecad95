"""
Repositories for the database layer.

Each repository wraps one ``AsyncSession`` and exposes typed queries for a
single aggregate. None of them commits; see ``core.database.session``.
"""

from .access_groups import AccessGroupRepository
from .base import AsyncBaseRepository, QueryBuilder
from .bundle import SqlRepoBundle, build_sql_repos_from_session
from .users import UserRepository

__all__ = [
    "AccessGroupRepository",
    "AsyncBaseRepository",
    "QueryBuilder",
    "SqlRepoBundle",
    "UserRepository",
    "build_sql_repos_from_session",
]
