"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers exception handlers and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from access_registry.core.database.session import dispose_engine, engine, init_db
from access_registry.core.logging_config import get_logger, setup_logging
from access_registry.core.monitoring import initialize_logfire

from .api.v1 import access_groups, health, users
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTimingMiddleware

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    On startup the tables are created when ``AUTO_CREATE_TABLES`` is set
    (development only, deployments run Alembic). On shutdown the engine's
    connection pool is disposed.
    """
    logger.info("Starting up Access Registry Server...")
    if settings.auto_create_tables:
        await init_db()
        logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down Access Registry Server...")
    await dispose_engine()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Access Registry API

    Register users, organise them into access groups and check whether a user
    holds access to a group.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestTimingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app=app, engine=engine)

app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(access_groups.router, prefix=f"{constant.API_V1_STR}/access-groups")


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
