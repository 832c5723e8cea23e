"""
In-memory store of open ride drafts.

Each entry pairs the ``RideDraft`` with the ``RouteLookup`` that serves
it, so overlapping lookups for one draft can supersede each other.
Sessions idle for longer than ``ttl_seconds`` are evicted on the next
``add`` / ``get``.  Nothing here survives a restart.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ridehost.domain.draft import RideDraft
from ridehost.domain.exceptions import DraftNotFoundError
from ridehost.workers.route_lookup import RouteLookup

logger = logging.getLogger(__name__)


@dataclass
class DraftSession:
    draft: RideDraft
    lookup: RouteLookup
    publishing: bool = False
    last_seen: float = 0.0


class DraftStore:
    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._sessions: dict[str, DraftSession] = {}

    def _evict_expired(self) -> None:
        if self.ttl_seconds is None:
            return
        cutoff = self.clock() - self.ttl_seconds
        expired = [
            draft_id
            for draft_id, s in self._sessions.items()
            if s.last_seen < cutoff and not s.publishing
        ]
        for draft_id in expired:
            self._sessions.pop(draft_id).lookup.cancel()
        if expired:
            logger.info("Evicted %d idle draft(s)", len(expired))

    def add(self, session: DraftSession) -> DraftSession:
        self._evict_expired()
        session.last_seen = self.clock()
        self._sessions[session.draft.id] = session
        return session

    def get(self, draft_id: str) -> DraftSession:
        self._evict_expired()
        try:
            session = self._sessions[draft_id]
        except KeyError:
            raise DraftNotFoundError(draft_id) from None
        session.last_seen = self.clock()
        return session

    def discard(self, draft_id: str) -> None:
        session = self._sessions.pop(draft_id, None)
        if session is None:
            raise DraftNotFoundError(draft_id)
        session.lookup.cancel()

    def __len__(self) -> int:
        return len(self._sessions)
