"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Switching the user directory from memory to Supabase only changes the
implementation chosen here.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthStrategy, ICredentialVerifier
    from modules.auth.strategies import (
        LocalStrategy,
        SessionEmbeddingStrategy,
        SessionPrincipalResolver,
    )
    from modules.sessions.interfaces import ISessionStore
    from modules.sessions.service import SessionManager
    from modules.users.interfaces import IUserDirectory
    from shared.cookies import CookieSigner


SESSION_COOKIE_SALT = "shopfront.session"
CAPABILITY_COOKIE_SALT = "shopfront.cookie"


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. A user directory or session store passed to the
    constructor is used instead of the configured one (tests inject
    in-memory instances this way).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        users: "IUserDirectory | None" = None,
        session_store: "ISessionStore | None" = None,
    ) -> None:
        self._settings = settings
        self._users = users
        self._session_store = session_store
        self._sessions: "SessionManager | None" = None
        self._verifier: "ICredentialVerifier | None" = None
        self._local_strategy: "LocalStrategy | None" = None
        self._session_strategy: "SessionEmbeddingStrategy | None" = None
        self._principal_resolver: "SessionPrincipalResolver | None" = None
        self._session_signer: "CookieSigner | None" = None
        self._capability_signer: "CookieSigner | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def users(self) -> "IUserDirectory":
        """Get the user directory selected by settings.user_directory."""
        if self._users is None:
            if self.settings.user_directory == "supabase":
                from modules.users.repository import SupabaseUserDirectory
                from shared.database import get_supabase_client
                self._users = SupabaseUserDirectory(
                    get_supabase_client(),
                    table_name=self.settings.supabase_users_table,
                )
            else:
                from modules.users.directory import InMemoryUserDirectory
                self._users = InMemoryUserDirectory()
        return self._users

    @property
    def session_store(self) -> "ISessionStore":
        if self._session_store is None:
            from modules.sessions.store import InMemorySessionStore
            self._session_store = InMemorySessionStore(
                sweep_interval=self.settings.session_purge_interval,
            )
        return self._session_store

    @property
    def sessions(self) -> "SessionManager":
        """Get the session manager instance."""
        if self._sessions is None:
            from modules.sessions.service import SessionManager
            self._sessions = SessionManager(
                self.session_store,
                max_age=self.settings.session_max_age,
            )
        return self._sessions

    @property
    def verifier(self) -> "ICredentialVerifier":
        if self._verifier is None:
            from modules.auth.service import CredentialVerifier
            self._verifier = CredentialVerifier(self.users)
        return self._verifier

    @property
    def local_strategy(self) -> "LocalStrategy":
        """Strategy-mediated login (user id in the session)."""
        if self._local_strategy is None:
            from modules.auth.strategies import LocalStrategy
            self._local_strategy = LocalStrategy(self.verifier, self.users)
        return self._local_strategy

    @property
    def session_strategy(self) -> "SessionEmbeddingStrategy":
        """Direct-embedding login (whole user in the session)."""
        if self._session_strategy is None:
            from modules.auth.strategies import SessionEmbeddingStrategy
            self._session_strategy = SessionEmbeddingStrategy(self.verifier)
        return self._session_strategy

    @property
    def principal_resolver(self) -> "SessionPrincipalResolver":
        if self._principal_resolver is None:
            from modules.auth.strategies import SessionPrincipalResolver
            self._principal_resolver = SessionPrincipalResolver(
                [self.session_strategy, self.local_strategy]
            )
        return self._principal_resolver

    @property
    def session_signer(self) -> "CookieSigner":
        if self._session_signer is None:
            from shared.cookies import CookieSigner
            self._session_signer = CookieSigner(
                self.settings.session_secret,
                salt=SESSION_COOKIE_SALT,
            )
        return self._session_signer

    @property
    def capability_signer(self) -> "CookieSigner":
        if self._capability_signer is None:
            from shared.cookies import CookieSigner
            self._capability_signer = CookieSigner(
                self.settings.cookie_secret,
                salt=CAPABILITY_COOKIE_SALT,
                max_age=self.settings.capability_cookie_max_age,
            )
        return self._capability_signer


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (used by tests)."""
    global _container
    _container = container


def use_settings(settings: Settings) -> ServiceContainer:
    """
    Make sure the installed container is built on ``settings``.

    The current container is kept if it already uses this exact settings
    object (tests install one with injected backends this way); otherwise
    a fresh container is installed.
    """
    global _container
    if _container is None or _container.settings is not settings:
        _container = ServiceContainer(settings=settings)
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings() -> Settings:
    """FastAPI dependency for the settings the container was built with."""
    return get_container().settings


def get_user_directory() -> "IUserDirectory":
    """FastAPI dependency for the user directory."""
    return get_container().users


def get_local_strategy() -> "IAuthStrategy":
    """FastAPI dependency for the strategy-mediated login flow."""
    return get_container().local_strategy


def get_session_strategy() -> "IAuthStrategy":
    """FastAPI dependency for the direct-embedding login flow."""
    return get_container().session_strategy


def get_principal_resolver() -> "SessionPrincipalResolver":
    """FastAPI dependency resolving the principal across both flows."""
    return get_container().principal_resolver


def get_capability_cookie_signer() -> "CookieSigner":
    return get_container().capability_signer
