"""
In-memory session store.

Entries expire a fixed number of seconds after their last write. Expired
entries are evicted lazily on read, swept whenever a new session is stored
(at most once per ``sweep_interval``), or in bulk by purge_expired().
"""

import logging
import time
from typing import Callable, Optional

from .interfaces import ISessionStore
from .models import SessionState

logger = logging.getLogger(__name__)


class InMemorySessionStore(ISessionStore):
    """
    Process-local session store.

    Args:
        clock: Monotonic seconds source; injectable for tests.
        sweep_interval: Minimum seconds between sweeps triggered by writes.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 60.0,
    ):
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval
        self._entries: dict[str, tuple[SessionState, float]] = {}

    async def get(self, session_id: str) -> Optional[SessionState]:
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        state, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[session_id]
            logger.debug("Evicted expired session on read")
            return None
        return state.model_copy(deep=True)

    async def set(self, session_id: str, state: SessionState, max_age: int) -> None:
        now = self._clock()
        if session_id not in self._entries and now >= self._next_sweep:
            self._sweep(now)
        self._entries[session_id] = (state.model_copy(deep=True), now + max_age)

    async def delete(self, session_id: str) -> None:
        self._entries.pop(session_id, None)

    async def purge_expired(self) -> int:
        return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        self._next_sweep = now + self._sweep_interval
        expired = [sid for sid, (_, expires_at) in self._entries.items() if now >= expires_at]
        for sid in expired:
            del self._entries[sid]
        if expired:
            logger.info(f"Purged {len(expired)} expired session(s)")
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
