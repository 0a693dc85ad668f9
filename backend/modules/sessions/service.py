"""
Session manager.

Owns the session lifecycle on top of an ISessionStore:
- sessions are created lazily, the first time something is written;
- identifiers the store does not know (never issued, expired, destroyed)
  are never reused, a fresh one is generated instead;
- mutations of one identifier are serialized with a per-identifier lock,
  so an async mutation cannot interleave with another request's mutation
  of the same session.
"""

import asyncio
import inspect
import logging
import secrets
from typing import Any, Awaitable, Callable, Optional, Union
from weakref import WeakValueDictionary

from .exceptions import SessionStoreError
from .interfaces import ISessionStore
from .models import SessionState

logger = logging.getLogger(__name__)

# A mutation edits the state in place; it may be a plain function or a coroutine function.
SessionMutation = Callable[[SessionState], Union[None, Awaitable[Any]]]

SESSION_ID_BYTES = 24


def generate_session_id() -> str:
    """Opaque, URL-safe session identifier."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)


async def apply_mutation(mutation: SessionMutation, state: SessionState) -> None:
    result = mutation(state)
    if inspect.isawaitable(result):
        await result


class SessionManager:
    """
    Creates, resolves and destroys server-side sessions.

    The manager is the only component that writes to the session store.
    """

    def __init__(
        self,
        store: ISessionStore,
        max_age: int = 3600,
        id_factory: Callable[[], str] = generate_session_id,
    ):
        if max_age <= 0:
            raise ValueError("Session max_age must be positive")
        self._store = store
        self._max_age = max_age
        self._id_factory = id_factory
        self._locks: "WeakValueDictionary[str, asyncio.Lock]" = WeakValueDictionary()

    @property
    def max_age(self) -> int:
        return self._max_age

    async def create_or_update(
        self,
        session_id: Optional[str],
        mutation: SessionMutation,
    ) -> str:
        """
        Apply a mutation to a session, creating it if needed.

        Args:
            session_id: Identifier presented by the client, if any
            mutation: Edits the state in place

        Returns:
            The identifier to hand back to the client: ``session_id`` if it
            resolved to a live session, a newly generated one otherwise.
        """
        if session_id:
            async with self._lock_for(session_id):
                state = await self._store.get(session_id)
                if state is not None:
                    await apply_mutation(mutation, state)
                    await self._store.set(session_id, state, self._max_age)
                    return session_id

        new_id = self._id_factory()
        async with self._lock_for(new_id):
            state = SessionState()
            await apply_mutation(mutation, state)
            await self._store.set(new_id, state, self._max_age)
        logger.debug("Created new session")
        return new_id

    async def resolve(self, session_id: Optional[str]) -> Optional[SessionState]:
        """
        Look up a session.

        Returns:
            A copy of the current state, or None if the identifier is
            missing, unknown or expired. Never creates a session.
        """
        if not session_id:
            return None
        return await self._store.get(session_id)

    async def destroy(self, session_id: Optional[str]) -> None:
        """Invalidate a session. Destroying an unknown session is a no-op."""
        if not session_id:
            return
        async with self._lock_for(session_id):
            await self._store.delete(session_id)
        logger.debug("Destroyed session")

    def _lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock



async def purge_sessions_periodically(store: ISessionStore, interval: float) -> None:
    """
    Drop expired sessions every ``interval`` seconds until cancelled.

    Started by the app lifespan and cancelled on shutdown.
    """
    while True:
        await asyncio.sleep(interval)
        try:
            await store.purge_expired()
        except SessionStoreError:
            logger.exception("Periodic session purge failed")
