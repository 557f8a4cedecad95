"""Middleware for the Access Registry server."""

from .request_timing import RequestTimingMiddleware

__all__ = ["RequestTimingMiddleware"]
