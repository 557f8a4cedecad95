"""
Schema models for access group and membership API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AccessGroupBase(BaseModel):
    """Base fields for access group schema."""

    name: str = Field(min_length=1, max_length=128, description="Unique group name (e.g., 'billing-admins')")
    description: Optional[str] = Field(default=None, description="What membership in this group grants")


class AccessGroupCreate(AccessGroupBase):
    """Schema for creating an access group."""

    pass


class AccessGroupUpdate(BaseModel):
    """Schema for updating an access group. An explicit ``null`` clears ``description``."""

    description: Optional[str] = None


class AccessGroupRead(AccessGroupBase):
    """Schema for reading an access group."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MemberSummary(BaseModel):
    """Minimal user representation nested inside a group."""

    id: int
    email: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class AccessGroupReadWithMembers(AccessGroupRead):
    """Schema for reading a group together with its eagerly loaded members."""

    members: list[MemberSummary] = Field(default_factory=list)


class MembershipCreate(BaseModel):
    """Schema for adding a user to a group."""

    user_id: int = Field(description="User receiving access")


class MembershipRead(BaseModel):
    """Schema for reading a membership."""

    user_id: int
    group_id: int
    granted_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AccessCheckRead(BaseModel):
    """Result of an access check."""

    user_id: int
    group_name: str
    has_access: bool
