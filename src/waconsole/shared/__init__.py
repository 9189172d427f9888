"""Shared utilities for waconsole"""

from .exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConsoleError,
    NotFoundError,
    SessionExpiredError,
    TransientError,
    ValidationError,
)

__all__ = [
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "ConsoleError",
    "NotFoundError",
    "SessionExpiredError",
    "TransientError",
    "ValidationError",
]
