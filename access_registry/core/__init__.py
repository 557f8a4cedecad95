"""
Core utilities and configuration for Access Registry.

This package provides core functionality including logging configuration,
error types, database setup, and other shared utilities.
"""

from access_registry.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
