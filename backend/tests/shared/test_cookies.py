"""Tests for shared/cookies.py."""

import time
from unittest.mock import patch

import pytest
from itsdangerous import TimestampSigner

from shared.cookies import CookieSigner


class TestCookieSigner:
    def test_sign_and_unsign(self):
        signer = CookieSigner("secret", salt="test")
        signed = signer.sign("World")
        assert signed != "World"
        assert signed.startswith("World.")
        assert signer.unsign(signed) == "World"

    def test_missing_value(self):
        signer = CookieSigner("secret", salt="test")
        assert signer.unsign(None) is None
        assert signer.unsign("") is None

    def test_unsigned_value_rejected(self):
        """A plain value without a signature should not verify."""
        signer = CookieSigner("secret", salt="test")
        assert signer.unsign("World") is None

    def test_tampered_value_rejected(self):
        signer = CookieSigner("secret", salt="test")
        signed = signer.sign("World")
        assert signer.unsign("Earth" + signed[len("World"):]) is None

    def test_other_secret_rejected(self):
        signed = CookieSigner("secret", salt="test").sign("World")
        assert CookieSigner("other", salt="test").unsign(signed) is None

    def test_other_salt_rejected(self):
        signed = CookieSigner("secret", salt="session").sign("abc")
        assert CookieSigner("secret", salt="cookie").unsign(signed) is None

    def test_empty_secret_raises(self):
        with pytest.raises(ValueError):
            CookieSigner("", salt="test")


class TestTimedCookieSigner:
    def test_fresh_value_accepted(self):
        signer = CookieSigner("secret", salt="test", max_age=60)
        assert signer.unsign(signer.sign("World")) == "World"

    def test_expired_value_rejected(self):
        """Values older than max_age should be rejected server-side."""
        signer = CookieSigner("secret", salt="test", max_age=60)
        with patch.object(TimestampSigner, "get_timestamp", return_value=int(time.time()) - 120):
            signed = signer.sign("World")
        assert signer.unsign(signed) is None
