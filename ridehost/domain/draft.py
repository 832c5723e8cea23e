"""
Ride draft: the state of one ride-creation session.

A draft owns the current ``RouteSummary``, its ``FareQuote`` and the
``SeatAllocator`` for the selected vehicle.  It is rebuilt from scratch
every time the host starts creating a ride and is never persisted; only
the payload produced by ``to_payload`` leaves the process.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from .entities import Driver, Preferences, RouteSummary, Vehicle
from .exceptions import DraftNotReadyError
from .pricing import FareEstimator, FareQuote
from .seats import SeatAllocator

DEFAULT_VEHICLE_CAPACITY = 12
DEFAULT_TOTAL_SEATS = 4

NO_ROUTE_MESSAGE = "No route data. Select start and end locations first."


@dataclass
class RideDraft:
    driver: Driver
    vehicles: list[Vehicle]
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    route: Optional[RouteSummary] = None
    fare: Optional[FareQuote] = None
    selected_vehicle_idx: int = 0
    departure_time: Optional[datetime] = None
    extra_time_minutes: int = 0
    preferences: Preferences = field(default_factory=Preferences)
    default_capacity: int = DEFAULT_VEHICLE_CAPACITY
    default_total: int = DEFAULT_TOTAL_SEATS
    seats: SeatAllocator = field(init=False)

    def __post_init__(self) -> None:
        vehicle = self.selected_vehicle
        self.seats = SeatAllocator(
            capacity=self._capacity_of(vehicle),
            total=self._total_of(vehicle),
        )

    # ── Vehicle ───────────────────────────────────────────────────

    @property
    def selected_vehicle(self) -> Optional[Vehicle]:
        if 0 <= self.selected_vehicle_idx < len(self.vehicles):
            return self.vehicles[self.selected_vehicle_idx]
        return None

    def _capacity_of(self, vehicle: Optional[Vehicle]) -> int:
        if vehicle and vehicle.total_seats:
            return vehicle.total_seats
        return self.default_capacity

    def _total_of(self, vehicle: Optional[Vehicle]) -> int:
        if vehicle and vehicle.total_seats:
            return vehicle.total_seats
        return self.default_total

    def select_vehicle(self, index: int) -> Vehicle:
        if not 0 <= index < len(self.vehicles):
            raise DraftNotReadyError(f"No vehicle at index {index}")
        self.selected_vehicle_idx = index
        vehicle = self.vehicles[index]
        if vehicle.total_seats:
            self.seats.switch_vehicle(vehicle.total_seats, vehicle.total_seats)
        else:
            # No seat count: keep the distribution, re-clamp to the fallback capacity.
            self.seats.capacity = self.default_capacity
            self.seats.set_total(self.seats.total)
        return vehicle

    # ── Route ─────────────────────────────────────────────────────

    def apply_route(self, summary: RouteSummary, estimator: FareEstimator) -> FareQuote:
        """Replace the route and re-quote; any previous extra fare is dropped."""
        self.route = summary
        self.fare = estimator.quote(summary.metrics.total_distance_km)
        return self.fare

    def clear_route(self) -> None:
        self.route = None
        self.fare = None

    # ── Schedule ──────────────────────────────────────────────────

    def set_extra_time(self, hours: int = 0, minutes: int = 0) -> int:
        self.extra_time_minutes = max(0, hours) * 60 + max(0, minutes)
        return self.extra_time_minutes

    # ── Publishing ────────────────────────────────────────────────

    def ensure_publishable(self, now: Optional[datetime] = None) -> None:
        if self.route is None or self.fare is None:
            raise DraftNotReadyError(NO_ROUTE_MESSAGE)
        if not self.vehicles:
            raise DraftNotReadyError(
                "You need at least one vehicle with verified insurance to create a ride."
            )
        if self.departure_time is not None:
            current = now or datetime.now(self.departure_time.tzinfo)
            if self.departure_time <= current:
                raise DraftNotReadyError("Departure time must be in the future.")

    def to_payload(self, now: Optional[datetime] = None) -> dict[str, Any]:
        """Assemble the ride-creation request body for the backend."""
        self.ensure_publishable(now)
        summary, fare = self.route, self.fare
        if summary is None or fare is None:
            raise DraftNotReadyError(NO_ROUTE_MESSAGE)

        departure = self.departure_time or now or datetime.now()
        vehicle = self.selected_vehicle
        route = summary.to_payload()
        return {
            "driver": {
                "userId": self.driver.user_id,
                "name": self.driver.name,
                "profileImage": self.driver.profile_image,
            },
            "route": route,
            "schedule": {
                "departureTime": departure.isoformat(),
                "extraTimeMinutes": self.extra_time_minutes,
            },
            "pricing": {"baseFare": fare.final_fare},
            "seats": {
                "total": self.seats.total,
                "available": self.seats.total,
                "seatTypes": self.seats.seat_types(),
            },
            "vehicle": vehicle.to_payload() if vehicle else None,
            "preferences": self.preferences.to_payload(),
            "metrics": {
                **route["metrics"],
                "durationMinutes": summary.metrics.duration_minutes
                + self.extra_time_minutes,
            },
        }
