"""
Supabase-backed user directory.

Encapsulates all queries against the ``users`` table:
    id (uuid, generated), username (unique), display_name, password (argon2 hash)

PostgREST failures are logged and re-raised as UserStoreError so the API
reports them uniformly; a unique violation on ``username`` becomes
UsernameTakenError.
"""

import logging
import uuid
from typing import Any, Optional

from starlette.concurrency import run_in_threadpool
from supabase import Client, PostgrestAPIError

from shared.repository import BaseRepository

from .exceptions import (
    InvalidFilterError,
    InvalidUserIdError,
    UsernameTakenError,
    UserRecordNotFoundError,
    UserStoreError,
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
from .passwords import Argon2PasswordHasher

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class SupabaseUserDirectory(BaseRepository[User], IUserDirectory):
    """
    Persistent user directory.

    Note: This repository does NOT perform authorization checks. Callers
    decide who may read or mutate users.
    """

    table_name = "users"

    def __init__(
        self,
        db: Client,
        table_name: Optional[str] = None,
        passwords: Optional[IPasswordHasher] = None,
    ) -> None:
        super().__init__(db, table_name)
        self.passwords = passwords or Argon2PasswordHasher()

    def parse_id(self, raw_id: str) -> str:
        try:
            return str(uuid.UUID(str(raw_id)))
        except ValueError:
            raise InvalidUserIdError(str(raw_id))

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def find_by_username(self, username: str) -> Optional[User]:
        rows = await self._execute(self._table().select("*").eq("username", username))
        return self._map_to_user(rows[0]) if rows else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        rows = await self._execute(self._table().select("*").eq("id", str(user_id)))
        return self._map_to_user(rows[0]) if rows else None

    async def list_users(
        self,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ) -> list[User]:
        query = self._table().select("*")
        if field and value is not None:
            column = FILTERABLE_FIELDS.get(field)
            if column is None:
                raise InvalidFilterError(field)
            query = query.like(column, f"%{value}%")
        rows = await self._execute(query.order("username"))
        return [self._map_to_user(row) for row in rows]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def insert(self, data: CreateUserRequest) -> User:
        if await self.find_by_username(data.username) is not None:
            raise UsernameTakenError(data.username)
        row = {
            "username": data.username,
            "display_name": data.display_name,
            "password": await self._hash(data.password),
        }
        rows = await self._execute(self._table().insert(row), username=data.username)
        user = self._map_to_user(rows[0])
        logger.info(f"Created user {user.id} ({user.username})")
        return user

    async def replace(self, user_id: UserId, data: ReplaceUserRequest) -> User:
        await self._require(user_id)
        await self._check_username_free(data.username, user_id)
        row = {
            "username": data.username,
            "display_name": data.display_name,
            "password": await self._hash(data.password),
        }
        return await self._write(user_id, row)

    async def update(self, user_id: UserId, data: UpdateUserRequest) -> User:
        current = await self._require(user_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return current
        if "username" in changes:
            await self._check_username_free(changes["username"], user_id)
        if "password" in changes:
            changes["password"] = await self._hash(changes["password"])
        return await self._write(user_id, changes)

    async def delete(self, user_id: UserId) -> None:
        await self._require(user_id)
        await self._execute(self._table().delete().eq("id", str(user_id)))
        logger.info(f"Deleted user {user_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _require(self, user_id: UserId) -> User:
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserRecordNotFoundError(user_id)
        return user

    async def _check_username_free(self, username: str, owner_id: UserId) -> None:
        existing = await self.find_by_username(username)
        if existing is not None and str(existing.id) != str(owner_id):
            raise UsernameTakenError(username)

    async def _write(self, user_id: UserId, row: dict[str, Any]) -> User:
        rows = await self._execute(
            self._table().update(row).eq("id", str(user_id)),
            username=row.get("username"),
        )
        if not rows:
            raise UserRecordNotFoundError(user_id)
        return self._map_to_user(rows[0])

    async def _execute(self, query, username: Optional[str] = None) -> list[dict[str, Any]]:
        """Run a blocking PostgREST query in the threadpool."""
        try:
            result = await run_in_threadpool(query.execute)
            return result.data or []
        except PostgrestAPIError as e:
            if e.code == UNIQUE_VIOLATION and username:
                raise UsernameTakenError(username)
            logger.exception("User store query failed")
            raise UserStoreError(e.message or "User store operation failed")

    async def _hash(self, password: Optional[str]) -> str:
        if not password:
            return ""
        return await run_in_threadpool(self.passwords.hash, password)

    def _map_to_user(self, row: dict[str, Any]) -> User:
        """Map a database row to a User model."""
        return User(
            id=str(row["id"]),
            username=row["username"],
            display_name=row.get("display_name") or "",
            password=row.get("password") or "",
        )
