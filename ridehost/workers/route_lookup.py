"""
Route Lookup Worker
===================

Runs directions lookups for one ride draft as cancellable asyncio tasks.

Ordering
--------
Every lookup is keyed by a monotonically increasing token.  Starting a
new lookup cancels the one in flight; a lookup whose token is no longer
the latest raises ``RouteLookupSuperseded`` instead of returning, so an
older response can never overwrite a newer route.

No timeout is applied here; the directions client owns that setting.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

from ridehost.domain.draft import RideDraft
from ridehost.domain.entities import GeoPoint, Place, RouteSummary
from ridehost.domain.exceptions import NoRouteFoundError, RouteLookupSuperseded
from ridehost.domain.grid import GRID_SIZE_DEG
from ridehost.domain.pricing import FareEstimator, FareQuote
from ridehost.domain.routing import summarize_route

logger = logging.getLogger(__name__)


class DirectionsProvider(Protocol):
    async def fetch_directions(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> dict[str, Any]: ...


class RouteLookup:
    def __init__(
        self, directions: DirectionsProvider, cell_size_deg: float = GRID_SIZE_DEG
    ):
        self.directions = directions
        self.cell_size_deg = cell_size_deg
        self._token = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def token(self) -> int:
        return self._token

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def _cancel_task(self) -> None:
        if self.in_flight:
            assert self._task is not None
            self._task.cancel()

    def cancel(self) -> None:
        """Abandon the lookup in flight; its caller sees ``RouteLookupSuperseded``."""
        if self.in_flight:
            self._token += 1
            self._cancel_task()

    async def lookup(self, start: Place, end: Place) -> RouteSummary:
        """Fetch and summarise the route, superseding any lookup still in flight."""
        self._token += 1
        token = self._token
        self._cancel_task()

        task = asyncio.create_task(self._fetch(start, end))
        self._task = task
        try:
            summary = await task
        except (asyncio.CancelledError, NoRouteFoundError):
            if token != self._token:
                logger.info("Route lookup #%d superseded by #%d", token, self._token)
                raise RouteLookupSuperseded(token) from None
            raise

        if token != self._token:
            logger.info("Discarding stale result of route lookup #%d", token)
            raise RouteLookupSuperseded(token)
        return summary

    async def _fetch(self, start: Place, end: Place) -> RouteSummary:
        directions = await self.directions.fetch_directions(start.point, end.point)
        return summarize_route(directions, start, end, self.cell_size_deg)


async def refresh_route(
    draft: RideDraft,
    lookup: RouteLookup,
    start: Place,
    end: Place,
    estimator: FareEstimator,
) -> FareQuote:
    """
    Recompute *draft*'s route and fare.

    On ``NoRouteFoundError`` the draft's previous route is cleared before
    the error propagates, so stale data is never shown next to an error.
    A superseded lookup leaves the draft untouched.
    """
    try:
        summary = await lookup.lookup(start, end)
    except NoRouteFoundError:
        draft.clear_route()
        raise
    return draft.apply_route(summary, estimator)
