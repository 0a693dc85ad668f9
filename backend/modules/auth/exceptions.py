"""
Authentication module exceptions.

CredentialError subclasses carry the precise failure reason for logging.
Login endpoints never expose them directly: they are replaced with
InvalidCredentialsError so a client cannot tell which half of the
credential pair was wrong.
"""

from typing import Any

from shared.exceptions import AuthenticationError, InternalError

from .models import VerifyFailure


class CredentialError(AuthenticationError):
    """Base class for a failed username/password check."""

    reason: VerifyFailure

    def __init__(self, message: str, username: str):
        super().__init__(
            message,
            code=self.reason.value.upper(),
            details={"username": username},
        )
        self.username = username


class UserNotFoundError(CredentialError):
    """Raised when no user has the submitted username."""

    reason = VerifyFailure.USER_NOT_FOUND

    def __init__(self, username: str):
        super().__init__("User not found", username)


class BadCredentialsError(CredentialError):
    """Raised when the password does not match the stored credential."""

    reason = VerifyFailure.BAD_CREDENTIALS

    def __init__(self, username: str):
        super().__init__("Invalid Credentials", username)


class InvalidCredentialsError(AuthenticationError):
    """Generic login failure returned to clients."""

    def __init__(self):
        super().__init__("Invalid Credentials", code="INVALID_CREDENTIALS")


class NotAuthenticatedError(AuthenticationError):
    """Raised when a request has no authenticated principal."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="NOT_AUTHENTICATED")


class PrincipalNotFoundError(AuthenticationError):
    """Raised when a session references a user that no longer exists."""

    def __init__(self, user_id: Any):
        super().__init__(
            "User not found",
            code="PRINCIPAL_NOT_FOUND",
            details={"user_id": str(user_id)},
        )


class LogoutError(InternalError):
    """Raised when the session could not be destroyed on logout."""

    def __init__(self, message: str = "Logout failed"):
        super().__init__(message, code="LOGOUT_FAILED")
