"""
Database entity models.

This package contains all database entity models. Importing it registers
every table on the shared SQLModel metadata, which ``create_all`` and the
Alembic environment both rely on.

Modules:
- users: Registered users
- access_groups: Named groups that carry access
- memberships: Link table between users and access groups
"""

from .access_groups import AccessGroup, AccessGroupBase
from .memberships import UserGroupLink
from .users import User, UserBase

__all__ = [
    "AccessGroup",
    "AccessGroupBase",
    "User",
    "UserBase",
    "UserGroupLink",
]
