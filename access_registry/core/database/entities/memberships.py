"""
Membership link entity.

The association table behind the many-to-many relationship between users
and access groups. Each row grants one user access to one group.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


class UserGroupLink(Base, table=True):
    """Membership of a user in an access group.

    Both foreign keys cascade on delete, so removing a user or a group
    removes its memberships at the database level as well.

    Table: user_group_links
    """

    __tablename__ = "user_group_links"

    user_id: Optional[int] = Field(default=None, foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    group_id: Optional[int] = Field(
        default=None, foreign_key="access_groups.id", primary_key=True, ondelete="CASCADE"
    )
    granted_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"UserGroupLink(user_id={self.user_id}, group_id={self.group_id})"
