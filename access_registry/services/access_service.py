"""
Access management service.

Implements the registry's business rules on top of the repositories: unique
emails and group names, no access for inactive users, and membership checks.
Every method runs in the caller's transaction. Raised errors leave the
rollback to the enclosing ``session_scope``.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from access_registry.core.database.entities import AccessGroup, User, UserGroupLink
from access_registry.core.database.repositories import build_sql_repos_from_session
from access_registry.core.errors import DuplicateEntityError, EntityNotFoundError, InactiveUserError
from access_registry.core.logging_config import get_logger

logger = get_logger(__name__)

USER_UPDATABLE_FIELDS = frozenset({"full_name", "is_active"})
GROUP_UPDATABLE_FIELDS = frozenset({"description"})


def _check_fields(entity: str, changes: Dict[str, Any], allowed: FrozenSet[str]) -> None:
    unknown = set(changes) - allowed
    if unknown:
        raise TypeError(f"{entity} fields cannot be updated: {sorted(unknown)}")


class AccessService:
    """Manage users, access groups and the memberships between them."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def register_user(self, email: str, full_name: Optional[str] = None) -> User:
        """Create a user.

        Raises:
            DuplicateEntityError: If the email is already registered
        """
        if await self.repos.users.get_by_email(email) is not None:
            raise DuplicateEntityError("User", "email", email)
        try:
            user = await self.repos.users.create(User(email=email, full_name=full_name))
        except IntegrityError as exc:
            # A concurrent transaction registered the same email first
            raise DuplicateEntityError("User", "email", email) from exc
        logger.info(f"Registered user {user.id} ({email})")
        return user

    async def get_user(self, user_id: int, *, with_groups: bool = False) -> User:
        """Get a user, optionally with its groups eagerly loaded.

        Raises:
            EntityNotFoundError: If the user does not exist
        """
        if with_groups:
            user = await self.repos.users.get_with_groups(user_id)
        else:
            user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def list_users(
        self, limit: Optional[int] = None, offset: Optional[int] = None, active_only: bool = False
    ) -> List[User]:
        return await self.repos.users.list_with_groups(limit=limit, offset=offset, active_only=active_only)

    async def update_user(self, user_id: int, **changes: Any) -> User:
        """Change the given fields of a user.

        Only the fields passed are touched, so ``full_name=None`` clears the
        display name. ``is_active=None`` leaves the flag as it is.

        Raises:
            EntityNotFoundError: If the user does not exist
            TypeError: If a field other than ``full_name`` or ``is_active`` is passed
        """
        _check_fields("User", changes, USER_UPDATABLE_FIELDS)
        user = await self.get_user(user_id)
        for field, value in changes.items():
            if field == "is_active" and value is None:
                continue
            setattr(user, field, value)
        return await self.repos.users.update(user)

    async def deactivate_user(self, user_id: int) -> User:
        """Deactivate a user. Existing memberships are kept.

        Raises:
            EntityNotFoundError: If the user does not exist
        """
        user = await self.repos.users.deactivate(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        logger.info(f"Deactivated user {user_id}")
        return user

    async def user_groups(self, user_id: int) -> List[AccessGroup]:
        """Return the groups a user belongs to."""
        user = await self.get_user(user_id, with_groups=True)
        return list(user.groups)

    # ------------------------------------------------------------------
    # Access groups
    # ------------------------------------------------------------------

    async def create_group(self, name: str, description: Optional[str] = None) -> AccessGroup:
        """Create an access group.

        Raises:
            DuplicateEntityError: If a group with that name exists
        """
        if await self.repos.access_groups.get_by_name(name) is not None:
            raise DuplicateEntityError("AccessGroup", "name", name)
        try:
            group = await self.repos.access_groups.create(AccessGroup(name=name, description=description))
        except IntegrityError as exc:
            raise DuplicateEntityError("AccessGroup", "name", name) from exc
        logger.info(f"Created access group {group.id} ({name})")
        return group

    async def get_group(self, group_id: int, *, with_members: bool = False) -> AccessGroup:
        """Get an access group, optionally with its members eagerly loaded.

        Raises:
            EntityNotFoundError: If the group does not exist
        """
        if with_members:
            group = await self.repos.access_groups.get_with_members(group_id)
        else:
            group = await self.repos.access_groups.get_by_id(group_id)
        if group is None:
            raise EntityNotFoundError("AccessGroup", group_id)
        return group

    async def list_groups(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[AccessGroup]:
        return await self.repos.access_groups.list(limit=limit, offset=offset)

    async def update_group(self, group_id: int, **changes: Any) -> AccessGroup:
        """Change the given fields of a group. ``description=None`` clears it."""
        _check_fields("AccessGroup", changes, GROUP_UPDATABLE_FIELDS)
        group = await self.get_group(group_id)
        for field, value in changes.items():
            setattr(group, field, value)
        return await self.repos.access_groups.update(group)

    async def delete_group(self, group_id: int) -> None:
        """Delete an access group together with its memberships.

        Raises:
            EntityNotFoundError: If the group does not exist
        """
        if not await self.repos.access_groups.delete(group_id):
            raise EntityNotFoundError("AccessGroup", group_id)
        logger.info(f"Deleted access group {group_id}")

    async def group_members(self, group_id: int) -> List[User]:
        """Return the members of a group."""
        group = await self.get_group(group_id, with_members=True)
        return list(group.members)

    # ------------------------------------------------------------------
    # Memberships
    # ------------------------------------------------------------------

    async def grant_access(self, user_id: int, group_id: int) -> UserGroupLink:
        """Add a user to a group. Granting an existing membership returns it unchanged.

        Raises:
            EntityNotFoundError: If the user or the group does not exist
            InactiveUserError: If the user is deactivated
        """
        user = await self.get_user(user_id)
        await self.get_group(group_id)
        if not user.is_active:
            raise InactiveUserError(user_id)
        link = await self.repos.access_groups.add_member(group_id, user_id)
        logger.debug(f"Granted user {user_id} access to group {group_id}")
        return link

    async def revoke_access(self, user_id: int, group_id: int) -> None:
        """Remove a user from a group.

        Raises:
            EntityNotFoundError: If the user is not a member of the group
        """
        if not await self.repos.access_groups.remove_member(group_id, user_id):
            raise EntityNotFoundError("Membership", {"user_id": user_id, "group_id": group_id})
        logger.debug(f"Revoked user {user_id} access to group {group_id}")

    async def has_access(self, user_id: int, group_name: str) -> bool:
        """Check whether an active user belongs to the group named ``group_name``.

        Unknown users and unknown groups simply have no access.
        """
        user = await self.repos.users.get_by_id(user_id)
        if user is None or not user.is_active:
            return False
        group = await self.repos.access_groups.get_by_name(group_name)
        if group is None:
            return False
        return await self.repos.access_groups.is_member(group.id, user_id)  # type: ignore[arg-type]
