"""Utility modules."""

from src.utils.error_handling import (
    AppException,
    AuthenticationError,
    NotConfiguredError,
    StorageError,
    UpstreamError,
    ValidationError,
)
from src.utils.logging_config import get_logger, setup_logging

__all__ = [
    # Error handling
    "AppException",
    "AuthenticationError",
    "NotConfiguredError",
    "StorageError",
    "UpstreamError",
    "ValidationError",
    # Logging
    "get_logger",
    "setup_logging",
]
