"""
Business logic and service layer.

Services run inside a session scope opened by their caller and never commit
on their own.
"""

from .access_service import AccessService

__all__ = ["AccessService"]
