"""
Exception Handlers for FastAPI Application.

Domain errors raised by the service layer are translated into 404 and 409
responses. Anything else reaches the global handler, which logs the full
context under an error ID and returns a 500.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from access_registry.core.errors import (
    AccessRegistryError,
    DuplicateEntityError,
    EntityNotFoundError,
    InactiveUserError,
)
from access_registry.core.logging_config import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR = {
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateEntityError: status.HTTP_409_CONFLICT,
    InactiveUserError: status.HTTP_409_CONFLICT,
}


async def access_registry_exception_handler(request: Request, exc: AccessRegistryError) -> JSONResponse:
    """
    Translate a domain error into a JSON response.

    Args:
        request: The HTTP request that caused the exception
        exc: The domain error raised by the service layer

    Returns:
        JSONResponse with the error message and type
    """
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": str(exc),
            "error_type": type(exc).__name__,
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(AccessRegistryError, access_registry_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
