"""Error types for the access registry.

Defines a small hierarchy of exceptions raised by the service layer to signal
missing rows, uniqueness conflicts and operations refused for inactive users.
The server maps each of them to an HTTP status code.
"""

from __future__ import annotations

from typing import Any


class AccessRegistryError(Exception):
    """Base error for all access registry exceptions."""


class EntityNotFoundError(AccessRegistryError):
    """Raised when a requested row does not exist."""

    def __init__(self, entity: str, key: Any) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key!r}")


class DuplicateEntityError(AccessRegistryError):
    """Raised when a write would violate a uniqueness constraint."""

    def __init__(self, entity: str, field: str, value: Any) -> None:
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} with {field}={value!r} already exists")


class InactiveUserError(AccessRegistryError):
    """Raised when access is granted to a deactivated user."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} is inactive")
