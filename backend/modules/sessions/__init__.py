"""
Sessions module.

Server-side sessions keyed by an opaque identifier carried in a cookie.

Public API:
- ISessionStore: Interface for session backends
- InMemorySessionStore: Process-local store with expiry
- SessionManager: Lazy creation, resolution and destruction of sessions
- SessionContext: Per-request handle used by route handlers
- SessionState: Typed session contents
- SessionStoreError: Backend failure
"""

from .interfaces import ISessionStore
from .models import SessionState
from .store import InMemorySessionStore
from .service import (
    SessionManager,
    SessionMutation,
    generate_session_id,
    purge_sessions_periodically,
)
from .context import SessionContext
from .exceptions import SessionStoreError

__all__ = [
    # Interface
    "ISessionStore",
    # Models
    "SessionState",
    # Implementations
    "InMemorySessionStore",
    "SessionManager",
    "SessionMutation",
    "SessionContext",
    "generate_session_id",
    "purge_sessions_periodically",
    # Exceptions
    "SessionStoreError",
]
