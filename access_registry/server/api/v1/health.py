"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from access_registry.core.database.session import get_session
from access_registry.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check():
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return {"status": "ok"}


@router.get(
    "/health/db",
    summary="Database Health Check",
    description="Run a trivial query to confirm the database is reachable.",
    response_description="Status object.",
)
async def database_health_check(session: AsyncSession = Depends(get_session)):
    """Database connectivity check, one ``SELECT 1`` through a regular session scope."""
    await session.execute(text("SELECT 1"))
    return {"status": "ok", "database": "reachable"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    """
    Get API version.

    Returns the current semantic version of the API and supported schema version.
    """
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}
