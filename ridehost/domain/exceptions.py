"""
Domain exceptions for the ride-creation flow.

Seat-allocation operations never raise; they clamp or refuse instead.
"""

from __future__ import annotations

from typing import Optional


class RideHostError(Exception):
    """Base exception for ridehost."""


class NoRouteFoundError(RideHostError):
    """The directions provider returned no usable route."""


class DirectionsUnavailableError(NoRouteFoundError):
    """The directions provider could not be reached or returned an HTTP error."""


class RouteLookupSuperseded(RideHostError):
    """A newer route lookup started while this one was still in flight."""

    def __init__(self, token: int):
        super().__init__(f"Route lookup #{token} was superseded by a newer request")
        self.token = token


class InvalidFareAdjustment(RideHostError):
    """Raised when an extra-fare amount is negative."""


class DraftNotReadyError(RideHostError):
    """The draft is missing something the requested action needs."""


class DraftNotFoundError(RideHostError):
    def __init__(self, draft_id: str):
        super().__init__(f"Draft {draft_id} not found")
        self.draft_id = draft_id


class BackendError(RideHostError):
    """The ride backend was unreachable or rejected a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
