"""
Products module exceptions.
"""

from shared.exceptions import AuthorizationError


class MissingCapabilityCookieError(AuthorizationError):
    """Capability cookie missing, tampered with, expired or holding the wrong value."""

    def __init__(self, message: str = "Sorry you need the correct cookies"):
        super().__init__(message, code="COOKIE_REQUIRED")
