"""
Repository bundle for dependency injection.

Groups every repository bound to one session so services receive a single
object per unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .access_groups import AccessGroupRepository
from .users import UserRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    users: UserRepository
    access_groups: AccessGroupRepository


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Session owned by the caller's scope

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        users=UserRepository(session),
        access_groups=AccessGroupRepository(session),
    )
