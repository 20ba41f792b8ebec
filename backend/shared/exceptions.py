"""
Base exception classes for the Chirp backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base to an HTTP status code (see api/errors.py).
"""

from datetime import datetime
from typing import Optional, Any


class ChirpError(Exception):
    """
    Base exception for all Chirp errors.

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


class NotFoundError(ChirpError):
    """Resource not found."""

    pass


class ValidationError(ChirpError):
    """Input validation failed."""

    pass


class AuthenticationError(ChirpError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(ChirpError):
    """Authorization failed (insufficient permissions)."""

    pass


class PolicyDeniedError(ChirpError):
    """
    A business policy refused the action.

    Raised for time-window restrictions, quota exhaustion and expired plans.
    The code is a stable machine-readable reason.
    """

    pass


class RateLimitedError(ChirpError):
    """The caller has exhausted an allowance and must wait."""

    def __init__(
        self,
        message: str,
        retry_after: datetime,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.retry_after = retry_after


class ExternalServiceError(ChirpError):
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
