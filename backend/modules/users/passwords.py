"""
Password hashers for stored user credentials.

The demo directory keeps plaintext credentials (compared in constant time);
the persisted directory stores argon2 hashes.
"""

import hmac
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError


class PlaintextPasswordHasher:
    """Stores passwords as given. Only for the seeded demo directory."""

    scheme = "plaintext"

    def hash(self, plain: str) -> str:
        if not plain:
            raise ValueError("Password must not be empty")
        return plain

    def verify(self, stored: str, plain: str) -> bool:
        if not stored or not plain:
            return False
        return hmac.compare_digest(stored.encode("utf-8"), plain.encode("utf-8"))


class Argon2PasswordHasher:
    """argon2id hashes via argon2-cffi."""

    scheme = "argon2"

    def __init__(self, hasher: Optional[PasswordHasher] = None):
        self._ph = hasher or PasswordHasher()

    def hash(self, plain: str) -> str:
        if not plain:
            raise ValueError("Password must not be empty")
        return self._ph.hash(plain)

    def verify(self, stored: str, plain: str) -> bool:
        if not stored or not plain:
            return False
        try:
            return self._ph.verify(stored, plain)
        except (VerifyMismatchError, InvalidHashError):
            return False
