"""
Sessions module exceptions.
"""

from shared.exceptions import InternalError


class SessionStoreError(InternalError):
    """Raised when the session backend cannot read or write a session."""

    def __init__(self, message: str = "Session store operation failed"):
        super().__init__(message, code="SESSION_STORE_ERROR")
