"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for tracing of the
access registry, including:
- SQLAlchemy statement tracing (one span per query, tagged with the engine)
- API endpoint tracing
- Request timing and error events

Logfire stays off unless LOGFIRE_ENABLED is set and a token is available, so
local development and the test-suite never talk to the Logfire backend.
"""

import logging
import os
from typing import Optional

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "access-registry")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")

LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_initialized = False


def initialize_logfire(app: Optional[FastAPI] = None, engine: Optional[AsyncEngine] = None) -> None:
    """
    Initialize Logfire for monitoring and tracing.

    Args:
        app: FastAPI application to instrument (optional).
        engine: Async engine whose statements should be traced (optional).
            The sync engine behind it is what SQLAlchemy emits events on.

    The initialization is conditional based on the LOGFIRE_ENABLED environment variable.
    """
    global _initialized

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    _initialized = True

    if LOGFIRE_TRACE_SQLALCHEMY and engine is not None:
        try:
            logfire.instrument_sqlalchemy(engine=engine.sync_engine)
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if LOGFIRE_TRACE_FASTAPI and app is not None:
        try:
            logfire.instrument_fastapi(app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument FastAPI: {e}")

    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _initialized:
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")
        return
    logfire.info(
        "API request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_transaction_rollback(error_type: str, error_message: str) -> None:
    """
    Record a rolled back session scope.

    Args:
        error_type: Name of the exception that aborted the transaction
        error_message: The exception message
    """
    if not _initialized:
        return
    logfire.warn("Transaction rolled back", error_type=error_type, error_message=error_message)
