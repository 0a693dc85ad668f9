"""
Sessions module interface.

A session store only persists and expires SessionState values; identifier
generation, locking and the lazy-creation policy live in SessionManager.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import SessionState


@runtime_checkable
class ISessionStore(Protocol):
    """
    Interface for session persistence backends.

    Implementations must hand out copies: mutating a returned state must
    not change what is stored until ``set`` is called.
    """

    async def get(self, session_id: str) -> Optional[SessionState]:
        """
        Get the state for an identifier.

        Returns:
            The stored state, or None if unknown or expired

        Raises:
            SessionStoreError: If the backend fails
        """
        ...

    async def set(self, session_id: str, state: SessionState, max_age: int) -> None:
        """
        Store state, expiring ``max_age`` seconds from now.

        Raises:
            SessionStoreError: If the backend fails
        """
        ...

    async def delete(self, session_id: str) -> None:
        """
        Remove a session. Unknown identifiers are ignored.

        Raises:
            SessionStoreError: If the backend fails
        """
        ...

    async def purge_expired(self) -> int:
        """Drop all expired entries. Returns the number removed."""
        ...
