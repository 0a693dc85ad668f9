"""
Credential verification.

Looks up a user by exact username in the injected directory and checks the
password with the directory's own hasher (constant-time plaintext for the
demo directory, argon2 for Supabase).
"""

from starlette.concurrency import run_in_threadpool

from modules.users.interfaces import IUserDirectory
from modules.users.models import User

from .exceptions import BadCredentialsError, UserNotFoundError
from .interfaces import ICredentialVerifier


class CredentialVerifier(ICredentialVerifier):
    """
    Backend-agnostic credential verifier.

    Read-only: verification never writes to the directory.
    """

    def __init__(self, directory: IUserDirectory):
        self._directory = directory

    async def verify(self, username: str, password: str) -> User:
        user = await self._directory.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        # argon2 checks are CPU-bound.
        matched = await run_in_threadpool(self._directory.passwords.verify, user.password, password)
        if not matched:
            raise BadCredentialsError(username)
        return user
