"""Access Registry.

An async web service that keeps track of users and the access groups they
belong to. Its data layer is a worked example of running SQLModel on top of
async SQLAlchemy in a web application.

High-level architecture
-----------------------

- ``access_registry.core``:

  - Logging, monitoring and error types shared by every layer.
  - ``core.database``: the global engine and session factory, the
    context-managed session scope, table entities, API schemas and
    repositories.

- ``access_registry.services``:

  - Business operations (registering users, granting and revoking access)
    that run inside the caller's session scope.

- ``access_registry.server``:

  - The FastAPI application, its routers, configuration and exception
    handlers.

Session and transaction rules
-----------------------------

1. Every request or background task opens its own ``AsyncSession`` from the
   global ``async_sessionmaker``. Sessions are never shared across tasks.
2. Repositories only ``flush()``. The enclosing ``session_scope`` commits once
   on success and rolls back on any exception.
3. Relationships are eager-loaded with ``selectinload`` when a query knows it
   needs them, and awaited through ``awaitable_attrs`` otherwise.
"""
