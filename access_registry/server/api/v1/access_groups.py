"""
API endpoints for managing access groups and their memberships.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from access_registry.core.database.schemas.access_groups import (
    AccessCheckRead,
    AccessGroupCreate,
    AccessGroupRead,
    AccessGroupReadWithMembers,
    AccessGroupUpdate,
    MembershipCreate,
    MembershipRead,
)
from access_registry.core.database.session import get_session
from access_registry.services import AccessService

router = APIRouter(tags=["access-groups"])


@router.post(
    "",
    response_model=AccessGroupRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Access Group",
    description="Create a new access group. Group names are unique.",
    responses={409: {"description": "Group name already taken"}},
)
async def create_access_group(
    group_data: AccessGroupCreate,
    session: AsyncSession = Depends(get_session),
) -> AccessGroupRead:
    group = await AccessService(session).create_group(group_data.name, group_data.description)
    return AccessGroupRead.model_validate(group)


@router.get(
    "",
    response_model=list[AccessGroupRead],
    summary="List Access Groups",
)
async def list_access_groups(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> list[AccessGroupRead]:
    groups = await AccessService(session).list_groups(limit=limit, offset=offset)
    return [AccessGroupRead.model_validate(g) for g in groups]


@router.get(
    "/check",
    response_model=AccessCheckRead,
    summary="Check Access",
    description="Check whether an active user belongs to the named group.",
)
async def check_access(
    user_id: int,
    group_name: str,
    session: AsyncSession = Depends(get_session),
) -> AccessCheckRead:
    allowed = await AccessService(session).has_access(user_id, group_name)
    return AccessCheckRead(user_id=user_id, group_name=group_name, has_access=allowed)


@router.get(
    "/{group_id}",
    response_model=AccessGroupReadWithMembers,
    summary="Get Access Group",
    description="Retrieve an access group together with its members.",
    responses={404: {"description": "Access group not found"}},
)
async def get_access_group(
    group_id: int,
    session: AsyncSession = Depends(get_session),
) -> AccessGroupReadWithMembers:
    group = await AccessService(session).get_group(group_id, with_members=True)
    return AccessGroupReadWithMembers.model_validate(group)


@router.patch(
    "/{group_id}",
    response_model=AccessGroupRead,
    summary="Update Access Group",
    responses={404: {"description": "Access group not found"}},
)
async def update_access_group(
    group_id: int,
    group_data: AccessGroupUpdate,
    session: AsyncSession = Depends(get_session),
) -> AccessGroupRead:
    group = await AccessService(session).update_group(group_id, **group_data.model_dump(exclude_unset=True))
    return AccessGroupRead.model_validate(group)


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Access Group",
    description="Delete an access group and every membership in it.",
    responses={404: {"description": "Access group not found"}},
)
async def delete_access_group(
    group_id: int,
    session: AsyncSession = Depends(get_session),
) -> Response:
    await AccessService(session).delete_group(group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{group_id}/members",
    response_model=MembershipRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Member",
    description="Grant a user access by adding it to the group. Adding an existing member is a no-op.",
    responses={
        404: {"description": "User or access group not found"},
        409: {"description": "User is inactive"},
    },
)
async def add_member(
    group_id: int,
    membership: MembershipCreate,
    session: AsyncSession = Depends(get_session),
) -> MembershipRead:
    link = await AccessService(session).grant_access(membership.user_id, group_id)
    return MembershipRead.model_validate(link)


@router.delete(
    "/{group_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Member",
    description="Revoke a user's access by removing it from the group.",
    responses={404: {"description": "Membership not found"}},
)
async def remove_member(
    group_id: int,
    user_id: int,
    session: AsyncSession = Depends(get_session),
) -> Response:
    await AccessService(session).revoke_access(user_id, group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
