"""
Base exception classes for the Hifz backend.

Each module should define its own exceptions that inherit from these bases.
The API maps each base class to one HTTP status (see api/errors.py).
"""

from typing import Optional, Any


class HifzError(Exception):
    """
    Base exception for all Hifz errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(HifzError):
    """Resource not found."""

    pass


class ValidationError(HifzError):
    """Input validation failed."""

    pass


class AuthenticationError(HifzError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(HifzError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(HifzError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StoreError(HifzError):
    """
    Persistence failure.

    The message and details are for logs only; API responses carry a
    generic message.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code="STORE_ERROR", details=details)
        self.operation = operation
        self.details["operation"] = operation
