"""
User repository.

Data access for users, including the eager-loading queries used whenever a
caller needs a user's groups in the same round trip.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from ..entities.access_groups import AccessGroup
from ..entities.memberships import UserGroupLink
from ..entities.users import User
from .base import AsyncBaseRepository, QueryBuilder


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address.

        Args:
            email: Email to look up, compared exactly

        Returns:
            User instance or None
        """
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_groups(self, user_id: int) -> Optional[User]:
        """Get a user with ``groups`` eagerly loaded.

        ``populate_existing`` makes the load overwrite a collection already
        sitting in the identity map, so memberships written earlier in the same
        session are visible.

        Args:
            user_id: User ID

        Returns:
            User instance with groups loaded, or None
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.groups))  # type: ignore[arg-type]
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_groups(
        self, limit: Optional[int] = None, offset: Optional[int] = None, active_only: bool = False
    ) -> List[User]:
        """List users with their groups loaded in one extra ``SELECT ... IN`` query.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            active_only: Only return active users

        Returns:
            List of User instances with groups loaded
        """
        stmt = (
            select(User)
            .options(selectinload(User.groups))  # type: ignore[arg-type]
            .order_by(User.id)
            .execution_options(populate_existing=True)
        )
        if active_only:
            stmt = stmt.where(User.is_active == True)  # noqa: E712
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_in_group(self, group_name: str) -> List[User]:
        """List the members of the group called ``group_name``.

        Args:
            group_name: Access group name

        Returns:
            Users holding membership, ordered by ID
        """
        stmt = (
            select(User)
            .join(UserGroupLink, UserGroupLink.user_id == User.id)
            .join(AccessGroup, AccessGroup.id == UserGroupLink.group_id)
            .where(AccessGroup.name == group_name)
            .order_by(User.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def deactivate(self, user_id: int) -> Optional[User]:
        """Mark a user inactive. Memberships are kept.

        Args:
            user_id: User ID

        Returns:
            The updated user, or None if it does not exist
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        user.is_active = False
        return await self.update(user)
