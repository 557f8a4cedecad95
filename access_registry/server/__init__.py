"""
Access Registry Server Package.

This package contains the web server implementation for the access registry.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and shared constants.
    exception_handlers: Mapping of domain errors and unhandled exceptions to responses.
    middleware: Request timing and tracing.
"""
