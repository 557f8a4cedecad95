"""
Access group entity models.

An access group is a named set of users. Holding membership in a group is
what "having access" means throughout the registry.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship

from ..base import Base, utc_now
from .memberships import UserGroupLink

if TYPE_CHECKING:
    from .users import User


class AccessGroupBase(Base):
    """Base fields for access group."""

    name: str = Field(index=True, unique=True, max_length=128, description="Unique group name")
    description: Optional[str] = Field(default=None, description="What membership in this group grants")


class AccessGroup(AccessGroupBase, table=True):
    """Persistent access group in database.

    Table: access_groups
    """

    __tablename__ = "access_groups"

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )

    members: List["User"] = Relationship(back_populates="groups", link_model=UserGroupLink)

    def __repr__(self) -> str:
        return f"AccessGroup(id={self.id}, name={self.name})"
