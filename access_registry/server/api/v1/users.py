"""
API endpoints for managing users.

Every endpoint receives a request-scoped session from ``get_session``; the
transaction commits when the endpoint returns and rolls back when it raises.
Domain errors are turned into HTTP responses by the registered exception handlers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from access_registry.core.database.schemas.access_groups import AccessGroupRead
from access_registry.core.database.schemas.users import (
    UserCreate,
    UserRead,
    UserReadWithGroups,
    UserUpdate,
)
from access_registry.core.database.session import get_session
from access_registry.services import AccessService

router = APIRouter(tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register User",
    description="Register a new user. Emails are unique.",
    responses={
        201: {"description": "User created successfully"},
        409: {"description": "Email already registered"},
    },
)
async def create_user(
    user_data: UserCreate,
    session: AsyncSession = Depends(get_session),
) -> UserRead:
    """
    Register a new user.

    - **email**: Unique login email.
    - **full_name**: Optional display name.
    """
    user = await AccessService(session).register_user(user_data.email, user_data.full_name)
    return UserRead.model_validate(user)


@router.get(
    "",
    response_model=list[UserReadWithGroups],
    summary="List Users",
    description="List users with their groups, loaded eagerly in one extra query.",
)
async def list_users(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    active_only: bool = False,
    session: AsyncSession = Depends(get_session),
) -> list[UserReadWithGroups]:
    users = await AccessService(session).list_users(limit=limit, offset=offset, active_only=active_only)
    return [UserReadWithGroups.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserReadWithGroups,
    summary="Get User",
    description="Retrieve a user together with the access groups it belongs to.",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: int,
    session: AsyncSession = Depends(get_session),
) -> UserReadWithGroups:
    user = await AccessService(session).get_user(user_id, with_groups=True)
    return UserReadWithGroups.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description="Update the display name or active flag of a user.",
    responses={404: {"description": "User not found"}},
)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    session: AsyncSession = Depends(get_session),
) -> UserRead:
    user = await AccessService(session).update_user(user_id, **user_data.model_dump(exclude_unset=True))
    return UserRead.model_validate(user)


@router.post(
    "/{user_id}/deactivate",
    response_model=UserRead,
    summary="Deactivate User",
    description="Deactivate a user. Memberships are kept but no longer grant access.",
    responses={404: {"description": "User not found"}},
)
async def deactivate_user(
    user_id: int,
    session: AsyncSession = Depends(get_session),
) -> UserRead:
    user = await AccessService(session).deactivate_user(user_id)
    return UserRead.model_validate(user)


@router.get(
    "/{user_id}/groups",
    response_model=list[AccessGroupRead],
    summary="List User Groups",
    description="List the access groups a user belongs to.",
    responses={404: {"description": "User not found"}},
)
async def list_user_groups(
    user_id: int,
    session: AsyncSession = Depends(get_session),
) -> list[AccessGroupRead]:
    groups = await AccessService(session).user_groups(user_id)
    return [AccessGroupRead.model_validate(g) for g in groups]
