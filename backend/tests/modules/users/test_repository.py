"""Tests for the Supabase-backed user directory."""

import threading
import uuid

import pytest
from unittest.mock import MagicMock
from supabase import PostgrestAPIError

from modules.users.exceptions import (
    InvalidFilterError,
    InvalidUserIdError,
    UsernameTakenError,
    UserRecordNotFoundError,
    UserStoreError,
)
from modules.users.interfaces import IUserDirectory
from modules.users.models import CreateUserRequest, UpdateUserRequest
from modules.users.passwords import PlaintextPasswordHasher
from modules.users.repository import SupabaseUserDirectory


USER_ID = str(uuid.uuid4())


def _row(**overrides) -> dict:
    row = {
        "id": USER_ID,
        "username": "anson",
        "display_name": "Anson",
        "password": "hello123",
    }
    row.update(overrides)
    return row


@pytest.fixture
def mock_db() -> MagicMock:
    return MagicMock()


@pytest.fixture
def table(mock_db) -> MagicMock:
    return mock_db.table.return_value


@pytest.fixture
def repo(mock_db) -> SupabaseUserDirectory:
    return SupabaseUserDirectory(mock_db, passwords=PlaintextPasswordHasher())


class TestSupabaseUserDirectory:
    def test_implements_interface(self, repo):
        assert isinstance(repo, IUserDirectory)

    def test_uses_users_table(self, repo, mock_db):
        repo._table()
        mock_db.table.assert_called_with("users")

    def test_custom_table(self, mock_db):
        repo = SupabaseUserDirectory(mock_db, table_name="shop_users")
        repo._table()
        mock_db.table.assert_called_with("shop_users")

    def test_default_hasher_is_argon2(self, mock_db):
        assert SupabaseUserDirectory(mock_db).passwords.scheme == "argon2"

    def test_parse_id(self, repo):
        assert repo.parse_id(USER_ID) == USER_ID
        with pytest.raises(InvalidUserIdError):
            repo.parse_id("12")


class TestReads:
    @pytest.mark.asyncio
    async def test_find_by_username(self, repo, table):
        table.select.return_value.eq.return_value.execute.return_value.data = [_row()]

        user = await repo.find_by_username("anson")

        table.select.return_value.eq.assert_called_once_with("username", "anson")
        assert user.id == USER_ID
        assert user.display_name == "Anson"

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, repo, table):
        table.select.return_value.eq.return_value.execute.return_value.data = []
        assert await repo.find_by_id(USER_ID) is None

    @pytest.mark.asyncio
    async def test_list_users_filtered(self, repo, table):
        like = table.select.return_value.like
        like.return_value.order.return_value.execute.return_value.data = [_row()]

        users = await repo.list_users("displayName", "An")

        like.assert_called_once_with("display_name", "%An%")
        assert [u.username for u in users] == ["anson"]

    @pytest.mark.asyncio
    async def test_list_users_unknown_filter(self, repo):
        with pytest.raises(InvalidFilterError):
            await repo.list_users("password", "x")

    @pytest.mark.asyncio
    async def test_query_failure_becomes_store_error(self, repo, table):
        table.select.return_value.eq.return_value.execute.side_effect = PostgrestAPIError(
            {"message": "connection refused", "code": "08006"}
        )
        with pytest.raises(UserStoreError) as exc_info:
            await repo.find_by_username("anson")
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_queries_run_off_the_event_loop(self, repo, table):
        loop_thread = threading.get_ident()
        seen = []

        def execute():
            seen.append(threading.get_ident())
            return MagicMock(data=[_row()])

        table.select.return_value.eq.return_value.execute.side_effect = execute

        await repo.find_by_username("anson")

        assert seen and seen[0] != loop_thread


class TestWrites:
    @pytest.mark.asyncio
    async def test_insert(self, repo, table):
        table.select.return_value.eq.return_value.execute.return_value.data = []
        table.insert.return_value.execute.return_value.data = [_row(username="jackson")]

        user = await repo.insert(CreateUserRequest(username="jackson", displayName="Jackson", password="pw"))

        table.insert.assert_called_once_with(
            {"username": "jackson", "display_name": "Jackson", "password": "pw"}
        )
        assert user.username == "jackson"

    @pytest.mark.asyncio
    async def test_insert_existing_username(self, repo, table):
        table.select.return_value.eq.return_value.execute.return_value.data = [_row()]
        with pytest.raises(UsernameTakenError):
            await repo.insert(CreateUserRequest(username="anson", displayName="Anson"))
        table.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_unique_violation(self, repo, table):
        """A race lost at the database maps to UsernameTakenError."""
        table.select.return_value.eq.return_value.execute.return_value.data = []
        table.insert.return_value.execute.side_effect = PostgrestAPIError(
            {"message": "duplicate key", "code": "23505"}
        )
        with pytest.raises(UsernameTakenError):
            await repo.insert(CreateUserRequest(username="jackson", displayName="Jackson"))

    @pytest.mark.asyncio
    async def test_update_unknown(self, repo, table):
        table.select.return_value.eq.return_value.execute.return_value.data = []
        with pytest.raises(UserRecordNotFoundError):
            await repo.update(USER_ID, UpdateUserRequest(displayName="X"))

    @pytest.mark.asyncio
    async def test_update_without_changes_returns_current(self, repo, table):
        table.select.return_value.eq.return_value.execute.return_value.data = [_row()]
        user = await repo.update(USER_ID, UpdateUserRequest())
        assert user.username == "anson"
        table.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_writes_changes(self, repo, table):
        table.select.return_value.eq.return_value.execute.return_value.data = [_row()]
        table.update.return_value.eq.return_value.execute.return_value.data = [
            _row(display_name="Anson C")
        ]

        user = await repo.update(USER_ID, UpdateUserRequest(displayName="Anson C"))

        table.update.assert_called_once_with({"display_name": "Anson C"})
        assert user.display_name == "Anson C"

    @pytest.mark.asyncio
    async def test_delete(self, repo, table):
        table.select.return_value.eq.return_value.execute.return_value.data = [_row()]
        await repo.delete(USER_ID)
        table.delete.return_value.eq.assert_called_once_with("id", USER_ID)
