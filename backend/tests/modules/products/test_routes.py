"""Tests for product endpoints."""

import time
from unittest.mock import patch

from itsdangerous import TimestampSigner

PRODUCTS = [{"id": 123, "name": "Chicken Breast", "price": 12.99}]


class TestListProducts:
    """Tests for GET /api/products"""

    def test_with_cookie_from_root(self, client):
        client.get("/")

        response = client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == PRODUCTS

    def test_without_cookie(self, client):
        response = client.get("/api/products")

        assert response.status_code == 401
        assert response.json()["msg"] == "Sorry you need the correct cookies"

    def test_unsigned_cookie(self, client):
        """A forged plain Hello=World cookie is not enough."""
        client.cookies.set("Hello", "World")

        assert client.get("/api/products").status_code == 401

    def test_signed_wrong_value(self, client, container):
        client.cookies.set("Hello", container.capability_signer.sign("Mars"))

        assert client.get("/api/products").status_code == 401

    def test_expired_cookie(self, client, container):
        with patch.object(TimestampSigner, "get_timestamp", return_value=int(time.time()) - 120):
            stale = container.capability_signer.sign("World")
        client.cookies.set("Hello", stale)

        assert client.get("/api/products").status_code == 401

    def test_login_not_required(self, client, container):
        client.cookies.set("Hello", container.capability_signer.sign("World"))
        assert client.get("/api/products").status_code == 200
