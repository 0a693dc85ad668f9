"""
Login strategies.

Two flows share the credential verifier and the session manager:

- LocalStrategy (strategy-mediated): stores only the user's id in the
  session (serialize_user) and re-queries the directory on every request
  (deserialize_user).
- SessionEmbeddingStrategy (direct-embedding): stores the whole user record
  in the session and reads it straight back.
"""

import logging
from typing import Optional, Sequence

from modules.sessions.context import SessionContext
from modules.sessions.exceptions import SessionStoreError
from modules.sessions.models import SessionState
from modules.users.interfaces import IUserDirectory
from modules.users.models import User, UserId

from .exceptions import (
    CredentialError,
    InvalidCredentialsError,
    LogoutError,
    PrincipalNotFoundError,
)
from .interfaces import IAuthStrategy, ICredentialVerifier

logger = logging.getLogger(__name__)


class SessionStrategy(IAuthStrategy):
    """Behaviour shared by both flows: credential check and logout."""

    name = "base"

    def __init__(self, verifier: ICredentialVerifier):
        self._verifier = verifier

    async def _authenticate(self, username: str, password: str) -> User:
        try:
            return await self._verifier.verify(username, password)
        except CredentialError as e:
            logger.info(f"[{self.name}] login rejected for {username!r}: {e.reason.value}")
            raise InvalidCredentialsError() from e

    async def logout(self, session: SessionContext) -> None:
        try:
            await session.destroy()
        except SessionStoreError as e:
            logger.error(f"[{self.name}] failed to destroy session on logout: {e.message}")
            raise LogoutError() from e


class LocalStrategy(SessionStrategy):
    """Username/password login that keeps only a user reference in the session."""

    name = "local"

    def __init__(self, verifier: ICredentialVerifier, directory: IUserDirectory):
        super().__init__(verifier)
        self._directory = directory

    def serialize_user(self, user: User) -> UserId:
        """Reduce a user to the reference stored in the session."""
        logger.debug(f"Serializing user {user.id}")
        return user.id

    async def deserialize_user(self, user_id: UserId) -> User:
        """
        Expand a session reference back into a full user.

        Raises:
            PrincipalNotFoundError: If the user no longer exists
        """
        logger.debug(f"Deserializing user {user_id}")
        user = await self._directory.find_by_id(user_id)
        if user is None:
            logger.warning(f"Session references missing user {user_id}")
            raise PrincipalNotFoundError(user_id)
        return user

    async def login(self, session: SessionContext, username: str, password: str) -> User:
        user = await self._authenticate(username, password)
        reference = self.serialize_user(user)

        def link_principal(state: SessionState) -> None:
            state.principal_id = reference

        await session.update(link_principal)
        logger.info(f"[{self.name}] user {user.id} logged in")
        return user

    async def current_user(self, session: SessionContext) -> Optional[User]:
        state = await session.load()
        if state is None or state.principal_id is None:
            return None
        return await self.deserialize_user(state.principal_id)


class SessionEmbeddingStrategy(SessionStrategy):
    """Username/password login that copies the user record into the session."""

    name = "session"

    async def login(self, session: SessionContext, username: str, password: str) -> User:
        user = await self._authenticate(username, password)

        def embed_user(state: SessionState) -> None:
            state.user = user

        await session.update(embed_user)
        logger.info(f"[{self.name}] user {user.id} logged in")
        return user

    async def current_user(self, session: SessionContext) -> Optional[User]:
        state = await session.load()
        return state.user if state is not None else None


class SessionPrincipalResolver:
    """Finds the principal for a request by asking each strategy in turn."""

    def __init__(self, strategies: Sequence[IAuthStrategy]):
        self._strategies = tuple(strategies)

    async def resolve(self, session: SessionContext) -> Optional[User]:
        for strategy in self._strategies:
            user = await strategy.current_user(session)
            if user is not None:
                return user
        return None
