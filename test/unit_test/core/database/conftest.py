"""Fixtures shared by the database layer tests."""

from __future__ import annotations

import pytest

from access_registry.core.database.entities import AccessGroup, User


@pytest.fixture
async def user(session, sample_user_data) -> User:
    """A committed user."""
    db_user = User(**sample_user_data)
    session.add(db_user)
    await session.commit()
    return db_user


@pytest.fixture
async def group(session, sample_group_data) -> AccessGroup:
    """A committed access group."""
    db_group = AccessGroup(**sample_group_data)
    session.add(db_group)
    await session.commit()
    return db_group
