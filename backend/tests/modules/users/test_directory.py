"""Tests for the in-memory user directory."""

import pytest

from modules.users.directory import DEMO_USERS, InMemoryUserDirectory
from modules.users.exceptions import (
    InvalidFilterError,
    InvalidUserIdError,
    UsernameTakenError,
    UserRecordNotFoundError,
)
from modules.users.interfaces import IUserDirectory
from modules.users.models import CreateUserRequest, ReplaceUserRequest, UpdateUserRequest, User


class TestInMemoryUserDirectory:
    def test_implements_interface(self):
        assert isinstance(InMemoryUserDirectory(), IUserDirectory)

    def test_seeded_with_demo_users(self):
        assert len(DEMO_USERS) == 7
        assert [u.username for u in DEMO_USERS][:2] == ["anson", "jack"]

    def test_duplicate_seed_username_rejected(self):
        with pytest.raises(UsernameTakenError):
            InMemoryUserDirectory(users=[User(id=1, username="anson"), User(id=2, username="anson")])

    def test_parse_id(self):
        directory = InMemoryUserDirectory()
        assert directory.parse_id("3") == 3
        with pytest.raises(InvalidUserIdError):
            directory.parse_id("abc")


class TestLookups:
    @pytest.mark.asyncio
    async def test_find_by_username(self, directory):
        user = await directory.find_by_username("jack")
        assert user.id == 2

    @pytest.mark.asyncio
    async def test_find_by_username_is_case_sensitive(self, directory):
        assert await directory.find_by_username("Jack") is None

    @pytest.mark.asyncio
    async def test_find_by_id(self, directory):
        assert (await directory.find_by_id(1)).username == "anson"
        assert await directory.find_by_id(99) is None

    @pytest.mark.asyncio
    async def test_list_all_in_order(self, directory):
        users = await directory.list_users()
        assert [u.id for u in users] == [1, 2, 3, 4, 5, 6, 7]

    @pytest.mark.asyncio
    async def test_list_filtered_by_substring(self, directory):
        users = await directory.list_users("username", "on")
        assert [u.username for u in users] == ["anson", "jason"]

    @pytest.mark.asyncio
    async def test_list_filtered_by_display_name(self, directory):
        users = await directory.list_users("displayName", "Ma")
        assert [u.username for u in users] == ["marilyn"]

    @pytest.mark.asyncio
    async def test_list_unknown_filter(self, directory):
        with pytest.raises(InvalidFilterError):
            await directory.list_users("password", "hello")


class TestWrites:
    @pytest.mark.asyncio
    async def test_insert_assigns_next_id(self, directory):
        user = await directory.insert(CreateUserRequest(username="jackson", displayName="Jackson"))
        assert user.id == 8
        assert await directory.find_by_id(8) == user

    @pytest.mark.asyncio
    async def test_insert_into_empty_directory(self):
        directory = InMemoryUserDirectory(users=[])
        user = await directory.insert(CreateUserRequest(username="jackson", displayName="Jackson"))
        assert user.id == 1

    @pytest.mark.asyncio
    async def test_deleted_id_not_reissued(self, directory):
        """Deleting the newest user must not let the next insert reuse its id."""
        await directory.delete(7)
        user = await directory.insert(CreateUserRequest(username="jackson", displayName="Jackson"))
        assert user.id == 8

    @pytest.mark.asyncio
    async def test_insert_duplicate_username(self, directory):
        with pytest.raises(UsernameTakenError):
            await directory.insert(CreateUserRequest(username="anson", displayName="Other"))

    @pytest.mark.asyncio
    async def test_insert_stores_password_via_hasher(self, directory):
        user = await directory.insert(
            CreateUserRequest(username="jackson", displayName="Jackson", password="secret1")
        )
        assert directory.passwords.verify(user.password, "secret1")

    @pytest.mark.asyncio
    async def test_replace_keeps_id(self, directory):
        user = await directory.replace(3, CreateUserRequest(username="adamant", displayName="Adamant"))
        assert user.id == 3
        assert user.username == "adamant"
        assert user.password == ""

    @pytest.mark.asyncio
    async def test_replace_same_username_allowed(self, directory):
        user = await directory.replace(3, ReplaceUserRequest(username="adam", displayName="A"))
        assert user.display_name == "A"

    @pytest.mark.asyncio
    async def test_replace_taken_username(self, directory):
        with pytest.raises(UsernameTakenError):
            await directory.replace(3, CreateUserRequest(username="anson", displayName="A"))

    @pytest.mark.asyncio
    async def test_replace_unknown(self, directory):
        with pytest.raises(UserRecordNotFoundError):
            await directory.replace(99, CreateUserRequest(username="nobody", displayName="N"))

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, directory):
        user = await directory.update(1, UpdateUserRequest(displayName="Anson C"))
        assert user.display_name == "Anson C"
        assert user.username == "anson"
        assert user.password == "hello123"

    @pytest.mark.asyncio
    async def test_update_unknown(self, directory):
        with pytest.raises(UserRecordNotFoundError):
            await directory.update(99, UpdateUserRequest(displayName="X"))

    @pytest.mark.asyncio
    async def test_delete(self, directory):
        await directory.delete(2)
        assert await directory.find_by_id(2) is None
        assert len(await directory.list_users()) == 6

    @pytest.mark.asyncio
    async def test_delete_unknown(self, directory):
        with pytest.raises(UserRecordNotFoundError):
            await directory.delete(99)
