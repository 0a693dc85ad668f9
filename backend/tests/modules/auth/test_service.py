"""Tests for the credential verifier."""

import threading

import pytest

from modules.auth.exceptions import BadCredentialsError, CredentialError, UserNotFoundError
from modules.auth.interfaces import ICredentialVerifier
from modules.auth.models import VerifyFailure
from modules.auth.service import CredentialVerifier
from modules.users.directory import InMemoryUserDirectory
from modules.users.models import User
from modules.users.passwords import Argon2PasswordHasher, PlaintextPasswordHasher


@pytest.fixture
def verifier(directory) -> CredentialVerifier:
    return CredentialVerifier(directory)


class TestCredentialVerifier:
    def test_implements_interface(self, verifier):
        assert isinstance(verifier, ICredentialVerifier)

    @pytest.mark.asyncio
    async def test_valid_credentials(self, verifier):
        user = await verifier.verify("anson", "hello123")
        assert user.id == 1
        assert user.username == "anson"

    @pytest.mark.asyncio
    async def test_unknown_user(self, verifier):
        with pytest.raises(UserNotFoundError) as exc_info:
            await verifier.verify("nobody", "hello123")
        assert exc_info.value.reason is VerifyFailure.USER_NOT_FOUND

    @pytest.mark.asyncio
    async def test_wrong_password(self, verifier):
        with pytest.raises(BadCredentialsError) as exc_info:
            await verifier.verify("anson", "hello124")
        assert exc_info.value.reason is VerifyFailure.BAD_CREDENTIALS

    @pytest.mark.asyncio
    async def test_username_is_case_sensitive(self, verifier):
        with pytest.raises(UserNotFoundError):
            await verifier.verify("Anson", "hello123")

    @pytest.mark.asyncio
    async def test_failures_share_base_class(self, verifier):
        for username, password in (("nobody", "x"), ("anson", "x")):
            with pytest.raises(CredentialError):
                await verifier.verify(username, password)

    @pytest.mark.asyncio
    async def test_verification_is_read_only(self, verifier, directory):
        before = await directory.list_users()
        await verifier.verify("anson", "hello123")
        with pytest.raises(CredentialError):
            await verifier.verify("anson", "wrong")
        assert await directory.list_users() == before

    @pytest.mark.asyncio
    async def test_hashed_directory(self):
        """The verifier uses the directory's own hasher."""
        hasher = Argon2PasswordHasher()
        directory = InMemoryUserDirectory(
            users=[User(id=1, username="anson", password=hasher.hash("hello123"))],
            passwords=hasher,
        )
        verifier = CredentialVerifier(directory)

        assert (await verifier.verify("anson", "hello123")).id == 1
        with pytest.raises(BadCredentialsError):
            await verifier.verify("anson", "hello124")

    @pytest.mark.asyncio
    async def test_password_check_runs_in_worker_thread(self, directory):
        loop_thread = threading.get_ident()
        seen = []

        class RecordingHasher(PlaintextPasswordHasher):
            def verify(self, stored: str, plain: str) -> bool:
                seen.append(threading.get_ident())
                return super().verify(stored, plain)

        directory.passwords = RecordingHasher()

        await CredentialVerifier(directory).verify("anson", "hello123")

        assert seen and seen[0] != loop_thread
