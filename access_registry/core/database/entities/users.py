"""
User entity models.

Users are the principals of the registry. Their access is expressed purely
through membership in access groups.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship

from ..base import Base, utc_now
from .memberships import UserGroupLink

if TYPE_CHECKING:
    from .access_groups import AccessGroup


class UserBase(Base):
    """Base fields for user."""

    email: str = Field(index=True, unique=True, max_length=320, description="Login email, unique per user")
    full_name: Optional[str] = Field(default=None, max_length=255, description="Display name")
    is_active: bool = Field(default=True, description="Inactive users cannot be granted access")


class User(UserBase, table=True):
    """Persistent user in database.

    ``groups`` is loaded lazily by default. Queries that need it use
    ``selectinload(User.groups)``; anything else awaits
    ``user.awaitable_attrs.groups``.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )

    groups: List["AccessGroup"] = Relationship(back_populates="members", link_model=UserGroupLink)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, active={self.is_active})"
