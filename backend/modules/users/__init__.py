"""
Users module.

The user directory: an injected collection of user records with an
in-memory backend (demo/tests) and a Supabase backend (production).

Public API:
- IUserDirectory, IPasswordHasher: Interfaces
- User, CreateUserRequest, ReplaceUserRequest, UpdateUserRequest: Models
- InMemoryUserDirectory: Process-local directory
- PlaintextPasswordHasher, Argon2PasswordHasher: Credential hashing
"""

from .interfaces import IPasswordHasher, IUserDirectory
from .models import CreateUserRequest, ReplaceUserRequest, UpdateUserRequest, User, UserId
from .directory import DEMO_USERS, InMemoryUserDirectory
from .passwords import Argon2PasswordHasher, PlaintextPasswordHasher
from .exceptions import (
    InvalidFilterError,
    InvalidUserIdError,
    UsernameTakenError,
    UserRecordNotFoundError,
    UserStoreError,
)

__all__ = [
    # Interfaces
    "IPasswordHasher",
    "IUserDirectory",
    # Models
    "User",
    "UserId",
    "CreateUserRequest",
    "ReplaceUserRequest",
    "UpdateUserRequest",
    # Implementations
    "DEMO_USERS",
    "InMemoryUserDirectory",
    "Argon2PasswordHasher",
    "PlaintextPasswordHasher",
    # Exceptions
    "InvalidFilterError",
    "InvalidUserIdError",
    "UsernameTakenError",
    "UserRecordNotFoundError",
    "UserStoreError",
]
