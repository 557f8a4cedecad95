"""
Schema models for user API requests and responses.

These schemas are used for API serialization/deserialization and are separate
from the entity models to allow independent evolution of API contracts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserBase(BaseModel):
    """Base fields for user schema."""

    email: str = Field(max_length=320, pattern=EMAIL_PATTERN, description="Login email, unique per user")
    full_name: Optional[str] = Field(default=None, max_length=255, description="Display name")


class UserCreate(UserBase):
    """Schema for registering a user."""

    pass


class UserUpdate(BaseModel):
    """Schema for updating a user.

    Only the fields present in the request change. An explicit ``null`` clears
    ``full_name``.
    """

    full_name: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None


class UserRead(UserBase):
    """Schema for reading a user."""

    id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GroupSummary(BaseModel):
    """Minimal group representation nested inside a user."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class UserReadWithGroups(UserRead):
    """Schema for reading a user together with its eagerly loaded groups."""

    groups: list[GroupSummary] = Field(default_factory=list)
