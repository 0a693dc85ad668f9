"""
Products module.

A read-only catalogue guarded by the signed capability cookie that the
root endpoint hands out.
"""

from .models import Product, CATALOGUE
from .exceptions import MissingCapabilityCookieError

__all__ = ["Product", "CATALOGUE", "MissingCapabilityCookieError"]
