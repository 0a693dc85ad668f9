"""
Users module exceptions.
"""

from shared.exceptions import ExternalServiceError, NotFoundError, ValidationError


class UserRecordNotFoundError(NotFoundError):
    """Raised when no user has the requested id."""

    def __init__(self, user_id):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": str(user_id)},
        )


class InvalidUserIdError(ValidationError):
    """Raised when a path id cannot be parsed for the active directory."""

    def __init__(self, raw_id: str):
        super().__init__(
            "Bad Request. Invalid ID",
            code="INVALID_USER_ID",
            details={"user_id": raw_id},
        )


class UsernameTakenError(ValidationError):
    """Raised when a write would break username uniqueness."""

    def __init__(self, username: str):
        super().__init__(
            f"Username already exists: {username}",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class InvalidFilterError(ValidationError):
    """Raised for an unknown list filter field."""

    def __init__(self, field: str):
        super().__init__(
            f"Cannot filter users by: {field}",
            code="INVALID_FILTER",
            details={"filter": field},
        )


class UserStoreError(ExternalServiceError):
    """Raised when the persisted user directory fails."""

    def __init__(self, message: str = "User store operation failed"):
        super().__init__(message, service="supabase", code="USER_STORE_ERROR")
