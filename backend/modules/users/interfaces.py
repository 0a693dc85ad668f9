"""
Users module interface.

The credential verifier, the auth strategies and the CRUD routes all depend
on IUserDirectory, never on a concrete backend, so the in-memory directory
and the Supabase one are interchangeable.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import CreateUserRequest, ReplaceUserRequest, UpdateUserRequest, User, UserId


@runtime_checkable
class IPasswordHasher(Protocol):
    """Hashes and verifies stored credentials."""

    scheme: str

    def hash(self, plain: str) -> str:
        """Return the value to store for a new password."""
        ...

    def verify(self, stored: str, plain: str) -> bool:
        """Return True if ``plain`` matches the stored credential."""
        ...


@runtime_checkable
class IUserDirectory(Protocol):
    """
    Interface for the authoritative collection of user records.

    Implementations enforce username uniqueness on every write.
    """

    passwords: IPasswordHasher

    def parse_id(self, raw_id: str) -> UserId:
        """
        Convert a path parameter into this directory's id type.

        Raises:
            InvalidUserIdError: If the value is not a valid id
        """
        ...

    async def find_by_username(self, username: str) -> Optional[User]:
        """Exact, case-sensitive username lookup."""
        ...

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Get a user by id, or None."""
        ...

    async def list_users(
        self,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ) -> list[User]:
        """
        List users, optionally keeping only those whose ``field``
        contains ``value``.
        """
        ...

    async def insert(self, data: CreateUserRequest) -> User:
        """
        Create a user, hashing the password with ``passwords``.

        Raises:
            UsernameTakenError: If the username already exists
        """
        ...

    async def replace(self, user_id: UserId, data: ReplaceUserRequest) -> User:
        """
        Replace every field of a user except its id.

        Raises:
            UserRecordNotFoundError: If the id is unknown
            UsernameTakenError: If the new username belongs to another user
        """
        ...

    async def update(self, user_id: UserId, data: UpdateUserRequest) -> User:
        """
        Merge the provided fields into a user.

        Raises:
            UserRecordNotFoundError: If the id is unknown
            UsernameTakenError: If the new username belongs to another user
        """
        ...

    async def delete(self, user_id: UserId) -> None:
        """
        Remove a user.

        Raises:
            UserRecordNotFoundError: If the id is unknown
        """
        ...
