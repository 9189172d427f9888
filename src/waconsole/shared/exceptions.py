"""Consolidated exceptions for waconsole.

All custom exceptions are defined here to provide a single source of truth
for error handling across the application.
"""

from typing import Any


class ConsoleError(Exception):
    """Base exception for waconsole errors"""

    pass


class ConfigurationError(ConsoleError):
    """Raised when configuration is invalid or missing"""

    pass


class ApiError(ConsoleError):
    """Base exception for backend API errors

    Attributes:
        status_code: HTTP status, or None when no response was received
        message: Human readable message extracted from the response
        payload: Parsed response body (if any)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class ValidationError(ApiError):
    """Raised for 4xx responses caused by invalid input"""

    def __init__(
        self,
        message: str,
        status_code: int | None = 400,
        payload: Any = None,
        field_errors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message, status_code, payload)
        self.field_errors = field_errors or {}


class AuthenticationError(ApiError):
    """Raised when the backend rejects the credential (401)"""

    pass


class SessionExpiredError(AuthenticationError):
    """Raised after a 401 has torn down the session globally

    The response that triggered it must not be used by the caller.
    """

    pass


class AuthorizationError(ApiError):
    """Raised when the credential is valid but the action is denied (403)"""

    pass


class NotFoundError(ApiError):
    """Raised when the requested resource does not exist (404)"""

    pass


class TransientError(ApiError):
    """Raised on network failures and 5xx responses"""

    pass
