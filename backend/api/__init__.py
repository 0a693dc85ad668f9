"""
Shopfront API package.

Provides the FastAPI application for the Shopfront session-auth demo.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
