"""
Per-request session handle.

The session middleware builds one SessionContext per request from the
identifier in the session cookie. Route handlers read and write the
session through it; afterwards the middleware inspects ``modified`` and
``destroyed`` to decide what cookie to send back.
"""

from typing import Optional

from .models import SessionState
from .service import SessionManager, SessionMutation, apply_mutation


class SessionContext:
    """Session access for a single request."""

    def __init__(self, manager: SessionManager, session_id: Optional[str] = None):
        self._manager = manager
        self.session_id = session_id
        self._state: Optional[SessionState] = None
        self._loaded = False
        self.modified = False
        self.destroyed = False

    @property
    def state(self) -> Optional[SessionState]:
        """Last state seen by this request (None until loaded or written)."""
        return self._state

    async def load(self) -> Optional[SessionState]:
        """Resolve the session once per request; reads never create one."""
        if not self._loaded:
            self._state = await self._manager.resolve(self.session_id)
            self._loaded = True
        return self._state

    async def update(self, mutation: SessionMutation) -> SessionState:
        """Mutate the session, creating it if the request had none."""
        written: list[SessionState] = []

        async def apply(state: SessionState) -> None:
            await apply_mutation(mutation, state)
            written.append(state)

        self.session_id = await self._manager.create_or_update(self.session_id, apply)
        self._state = written[-1]
        self._loaded = True
        self.modified = True
        self.destroyed = False
        return self._state

    async def destroy(self) -> None:
        """Destroy the session (idempotent)."""
        await self._manager.destroy(self.session_id)
        self.session_id = None
        self._state = None
        self._loaded = True
        self.modified = False
        self.destroyed = True
