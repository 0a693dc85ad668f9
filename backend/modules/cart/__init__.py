"""
Cart module.

A per-session shopping cart stored in SessionState.cart; available only to
logged-in users.
"""
