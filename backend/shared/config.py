"""
Centralized configuration for the Shopfront backend.

All settings are loaded from environment variables with sensible defaults.
Settings are not prefixed, so the conventional PORT variable overrides
the listen port.
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Shopfront API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Server-side sessions
    session_secret: str = "shopfront-session-secret"
    session_cookie_name: str = "sid"
    session_max_age: int = 60 * 60  # seconds
    session_cookie_secure: bool = False
    session_purge_interval: int = 60  # seconds between expired-session sweeps

    # Signed capability cookie (issued by GET /, checked by /api/products)
    cookie_secret: str = "shopfront-cookie-secret"
    capability_cookie_name: str = "Hello"
    capability_cookie_value: str = "World"
    capability_cookie_max_age: int = 60  # seconds

    # User directory backend
    user_directory: Literal["memory", "supabase"] = "memory"

    # Supabase (persisted user directory)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_users_table: str = "users"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
