"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the database layer using SQLModel.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import ConfigDict
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlmodel import SQLModel


class Base(SQLModel, AsyncAttrs):  # type: ignore[misc]
    """Base class for all SQLModel entities.

    ``AsyncAttrs`` adds the ``awaitable_attrs`` accessor, so a relationship
    that was not eager-loaded can still be read from async code::

        groups = await user.awaitable_attrs.groups
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)
