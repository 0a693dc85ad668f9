"""
Shared infrastructure for Shopfront backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- repository: Base class for Supabase-backed repositories
- cookies: Signed cookie values (itsdangerous)
- exceptions: Base exception classes
- logging: Root logger setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .cookies import CookieSigner
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    ShopfrontError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    InternalError,
    ExternalServiceError,
)

__all__ = [
    "Settings",
    "get_settings",
    "CookieSigner",
    "get_supabase_client",
    "reset_client_cache",
    "ShopfrontError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "InternalError",
    "ExternalServiceError",
]
