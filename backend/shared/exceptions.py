"""
Base exception classes for the Shopfront backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base to a single HTTP status, so module code only
has to pick the right parent class.
"""

from typing import Optional, Any


class ShopfrontError(Exception):
    """
    Base exception for all Shopfront errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

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
            "msg": self.message,
            "code": self.code,
            "details": self.details,
        }


class ValidationError(ShopfrontError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(ShopfrontError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(ShopfrontError):
    """Authorization failed (no valid session or capability cookie)."""

    status_code = 401


class NotFoundError(ShopfrontError):
    """Resource not found."""

    status_code = 404


class InternalError(ShopfrontError):
    """
    An underlying store or service failed.

    Reported to clients as 400 and logged server-side.
    """

    status_code = 400


class ExternalServiceError(InternalError):
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
