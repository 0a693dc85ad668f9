"""
Signed cookie values.

Cookie values handed to clients are signed with a server secret using
itsdangerous. A value whose signature does not verify is treated exactly
like a missing cookie.
"""

from typing import Optional

from itsdangerous import BadSignature, Signer, SignatureExpired, TimestampSigner


class CookieSigner:
    """
    Signs and verifies cookie values.

    When ``max_age`` is given the signature embeds a timestamp and values
    older than ``max_age`` seconds are rejected on the server side as well,
    independent of the browser honouring the cookie's own Max-Age.
    """

    def __init__(self, secret: str, salt: str, max_age: Optional[int] = None):
        if not secret:
            raise ValueError("Cookie signing secret must not be empty")
        self._max_age = max_age
        if max_age is None:
            self._signer: Signer = Signer(secret, salt=salt)
        else:
            self._signer = TimestampSigner(secret, salt=salt)

    def sign(self, value: str) -> str:
        return self._signer.sign(value).decode("utf-8")

    def unsign(self, signed: Optional[str]) -> Optional[str]:
        """Return the original value, or None if missing, tampered or expired."""
        if not signed:
            return None
        try:
            if isinstance(self._signer, TimestampSigner):
                raw = self._signer.unsign(signed, max_age=self._max_age)
            else:
                raw = self._signer.unsign(signed)
        except SignatureExpired:
            return None
        except BadSignature:
            return None
        return raw.decode("utf-8")
