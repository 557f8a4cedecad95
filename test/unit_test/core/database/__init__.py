"""Unit tests for the database layer.

This package contains unit tests for access_registry/core/database, including:

- Entity model tests (SQLModel)
- Session scope and commit policy tests
- Relationship loading tests (eager, awaitable, explicit refresh)
- Repository tests against in-memory SQLite and mocked sessions

All tests use SQLite through aiosqlite, so no external database service is needed.
"""
