"""Relationship loading in async code.

An unloaded relationship cannot be touched synchronously from async code,
because the lazy load would need implicit IO. These tests pin down the three
supported ways of reading one: ``selectinload`` in the query, awaiting
``awaitable_attrs``, and ``load_relationship``.
"""

from __future__ import annotations

import pytest
from sqlalchemy.exc import MissingGreenlet, StatementError
from sqlalchemy.orm import selectinload
from sqlmodel import select

from access_registry.core.database.entities import AccessGroup, User, UserGroupLink
from access_registry.core.database.utils import load_relationship


@pytest.fixture
async def membership(session, user, group) -> UserGroupLink:
    link = UserGroupLink(user_id=user.id, group_id=group.id)
    session.add(link)
    await session.commit()
    return link


async def test_plain_attribute_access_on_unloaded_relationship_fails(session_factory, user, membership):
    async with session_factory() as session:
        fresh = await session.get(User, user.id)

        # Newer SQLAlchemy releases wrap MissingGreenlet in a StatementError
        with pytest.raises((MissingGreenlet, StatementError), match="greenlet_spawn has not been called"):
            _ = fresh.groups


async def test_selectinload_makes_relationship_available(session_factory, user, group, membership):
    async with session_factory() as session:
        result = await session.execute(select(User).where(User.id == user.id).options(selectinload(User.groups)))
        fresh = result.scalar_one()

    # Loaded collections stay readable after the session is gone
    assert [g.name for g in fresh.groups] == [group.name]


async def test_awaitable_attrs_loads_on_demand(session_factory, user, group, membership):
    async with session_factory() as session:
        fresh_group = await session.get(AccessGroup, group.id)
        members = await fresh_group.awaitable_attrs.members

    assert [m.email for m in members] == [user.email]


async def test_load_relationship_sees_rows_written_after_first_load(session_factory, user, group):
    async with session_factory() as session:
        fresh = await session.get(User, user.id)
        assert await fresh.awaitable_attrs.groups == []

        session.add(UserGroupLink(user_id=user.id, group_id=group.id))
        await session.flush()

        groups = await load_relationship(session, fresh, "groups")

    assert [g.id for g in groups] == [group.id]
