"""
Authentication module.

Handles credential verification and the two session-backed login flows.

Public API:
- ICredentialVerifier, IAuthStrategy: Interfaces
- CredentialVerifier: Directory-backed verifier
- LocalStrategy, SessionEmbeddingStrategy: Login flows
- SessionPrincipalResolver: Principal lookup across flows
- LoginRequest, VerifyFailure: Models
- Auth exceptions: UserNotFoundError, BadCredentialsError, etc.
"""

from .interfaces import IAuthStrategy, ICredentialVerifier
from .models import LoginRequest, VerifyFailure
from .service import CredentialVerifier
from .strategies import (
    LocalStrategy,
    SessionEmbeddingStrategy,
    SessionPrincipalResolver,
    SessionStrategy,
)
from .exceptions import (
    BadCredentialsError,
    CredentialError,
    InvalidCredentialsError,
    LogoutError,
    NotAuthenticatedError,
    PrincipalNotFoundError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IAuthStrategy",
    "ICredentialVerifier",
    # Models
    "LoginRequest",
    "VerifyFailure",
    # Implementations
    "CredentialVerifier",
    "LocalStrategy",
    "SessionEmbeddingStrategy",
    "SessionPrincipalResolver",
    "SessionStrategy",
    # Exceptions
    "BadCredentialsError",
    "CredentialError",
    "InvalidCredentialsError",
    "LogoutError",
    "NotAuthenticatedError",
    "PrincipalNotFoundError",
    "UserNotFoundError",
]
