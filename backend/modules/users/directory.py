"""
In-memory user directory.

An ordered, process-local list of users. Used by default (seeded with the
demo accounts) and throughout the tests. Credentials are kept in plaintext
unless a different hasher is injected.
"""

import logging
from typing import Iterable, Optional

from .exceptions import (
    InvalidFilterError,
    InvalidUserIdError,
    UsernameTakenError,
    UserRecordNotFoundError,
)
from .interfaces import IPasswordHasher, IUserDirectory
from .models import (
    FILTERABLE_FIELDS,
    CreateUserRequest,
    ReplaceUserRequest,
    UpdateUserRequest,
    User,
    UserId,
)
from .passwords import PlaintextPasswordHasher

logger = logging.getLogger(__name__)


DEMO_USERS: tuple[User, ...] = (
    User(id=1, username="anson", display_name="Anson", password="hello123"),
    User(id=2, username="jack", display_name="Jack", password="hello124"),
    User(id=3, username="adam", display_name="Adam", password="hello125"),
    User(id=4, username="tina", display_name="Tina", password="hello126"),
    User(id=5, username="jason", display_name="Jason", password="hello127"),
    User(id=6, username="henry", display_name="Henry", password="hello128"),
    User(id=7, username="marilyn", display_name="Marilyn", password="hello129"),
)


class InMemoryUserDirectory(IUserDirectory):
    """
    User directory backed by a Python list.

    Ids are integers; a new user gets the highest id ever issued + 1 (1 for
    an empty directory), so a deleted user's id is never handed out again.
    Order of insertion is preserved for listing.
    """

    def __init__(
        self,
        users: Optional[Iterable[User]] = None,
        passwords: Optional[IPasswordHasher] = None,
    ):
        self.passwords = passwords or PlaintextPasswordHasher()
        self._users: list[User] = []
        for user in DEMO_USERS if users is None else users:
            if self._index_of_username(user.username) is not None:
                raise UsernameTakenError(user.username)
            self._users.append(user)
        self._last_id = max((u.id for u in self._users if isinstance(u.id, int)), default=0)

    def parse_id(self, raw_id: str) -> int:
        try:
            return int(raw_id)
        except (TypeError, ValueError):
            raise InvalidUserIdError(str(raw_id))

    async def find_by_username(self, username: str) -> Optional[User]:
        index = self._index_of_username(username)
        return None if index is None else self._users[index]

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        index = self._index_of_id(user_id)
        return None if index is None else self._users[index]

    async def list_users(
        self,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ) -> list[User]:
        if not field or value is None:
            return list(self._users)
        attr = FILTERABLE_FIELDS.get(field)
        if attr is None:
            raise InvalidFilterError(field)
        return [u for u in self._users if value in getattr(u, attr)]

    async def insert(self, data: CreateUserRequest) -> User:
        if self._index_of_username(data.username) is not None:
            raise UsernameTakenError(data.username)
        self._last_id += 1
        user = User(
            id=self._last_id,
            username=data.username,
            display_name=data.display_name,
            password=self.passwords.hash(data.password) if data.password else "",
        )
        self._users.append(user)
        logger.info(f"Created user {user.id} ({user.username})")
        return user

    async def replace(self, user_id: UserId, data: ReplaceUserRequest) -> User:
        index = self._require_index(user_id)
        self._check_username_free(data.username, user_id)
        user = User(
            id=self._users[index].id,
            username=data.username,
            display_name=data.display_name,
            password=self.passwords.hash(data.password) if data.password else "",
        )
        self._users[index] = user
        return user

    async def update(self, user_id: UserId, data: UpdateUserRequest) -> User:
        index = self._require_index(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "username" in changes:
            self._check_username_free(changes["username"], user_id)
        if "password" in changes:
            changes["password"] = self.passwords.hash(changes["password"])
        user = self._users[index].model_copy(update=changes)
        self._users[index] = user
        return user

    async def delete(self, user_id: UserId) -> None:
        index = self._require_index(user_id)
        removed = self._users.pop(index)
        logger.info(f"Deleted user {removed.id} ({removed.username})")

    def _index_of_id(self, user_id: UserId) -> Optional[int]:
        for i, user in enumerate(self._users):
            if user.id == user_id:
                return i
        return None

    def _index_of_username(self, username: str) -> Optional[int]:
        for i, user in enumerate(self._users):
            if user.username == username:
                return i
        return None

    def _require_index(self, user_id: UserId) -> int:
        index = self._index_of_id(user_id)
        if index is None:
            raise UserRecordNotFoundError(user_id)
        return index

    def _check_username_free(self, username: str, owner_id: UserId) -> None:
        index = self._index_of_username(username)
        if index is not None and self._users[index].id != owner_id:
            raise UsernameTakenError(username)
