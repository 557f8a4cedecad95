"""
Access group repository.

Data access for access groups and the membership rows linking them to users.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from ..entities.access_groups import AccessGroup
from ..entities.memberships import UserGroupLink
from .base import AsyncBaseRepository


class AccessGroupRepository(AsyncBaseRepository[AccessGroup]):
    """Repository for access group and membership data access using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AccessGroup)

    async def get_by_name(self, name: str) -> Optional[AccessGroup]:
        """Get an access group by its unique name."""
        stmt = select(AccessGroup).where(AccessGroup.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_members(self, group_id: int) -> Optional[AccessGroup]:
        """Get an access group with ``members`` eagerly loaded.

        Args:
            group_id: Access group ID

        Returns:
            AccessGroup instance with members loaded, or None
        """
        stmt = (
            select(AccessGroup)
            .where(AccessGroup.id == group_id)
            .options(selectinload(AccessGroup.members))  # type: ignore[arg-type]
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_membership(self, group_id: int, user_id: int) -> Optional[UserGroupLink]:
        """Get the membership row for ``user_id`` in ``group_id``."""
        return await self.session.get(UserGroupLink, {"user_id": user_id, "group_id": group_id})

    async def add_member(self, group_id: int, user_id: int) -> UserGroupLink:
        """Add a user to a group.

        Adding an existing member is a no-op that returns the existing row.

        Args:
            group_id: Access group ID
            user_id: User ID

        Returns:
            The membership row
        """
        existing = await self.get_membership(group_id, user_id)
        if existing is not None:
            return existing

        link = UserGroupLink(user_id=user_id, group_id=group_id)
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def remove_member(self, group_id: int, user_id: int) -> bool:
        """Remove a user from a group.

        Returns:
            True if a membership was removed, False if there was none
        """
        link = await self.get_membership(group_id, user_id)
        if link is None:
            return False
        await self.session.delete(link)
        await self.session.flush()
        return True

    async def is_member(self, group_id: int, user_id: int) -> bool:
        """Check whether ``user_id`` belongs to ``group_id``."""
        return await self.get_membership(group_id, user_id) is not None
