"""
Authentication module interface.

Routes depend on IAuthStrategy, and strategies depend on
ICredentialVerifier, so either login flow can be swapped or removed
without touching the other.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.sessions.context import SessionContext
from modules.users.models import User


@runtime_checkable
class ICredentialVerifier(Protocol):
    """Checks a username/password pair against the user directory."""

    async def verify(self, username: str, password: str) -> User:
        """
        Confirm identity.

        Args:
            username: Exact, case-sensitive username
            password: Submitted password

        Returns:
            The matching user record

        Raises:
            UserNotFoundError: If no user has this username
            BadCredentialsError: If the password does not match
        """
        ...


@runtime_checkable
class IAuthStrategy(Protocol):
    """
    A login flow built on the credential verifier.

    Strategies share the session manager and the session cookie; they
    differ in what they store in the session and how the principal is
    re-derived on later requests.
    """

    name: str

    async def login(self, session: SessionContext, username: str, password: str) -> User:
        """
        Verify credentials and record the principal in the session.

        Raises:
            InvalidCredentialsError: If verification fails (session untouched)
        """
        ...

    async def current_user(self, session: SessionContext) -> Optional[User]:
        """
        The principal for this request, or None if not logged in.

        Raises:
            PrincipalNotFoundError: If the session references a vanished user
        """
        ...

    async def logout(self, session: SessionContext) -> None:
        """
        End the login by destroying the session.

        Raises:
            LogoutError: If the session could not be destroyed
        """
        ...
