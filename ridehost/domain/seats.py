"""
Seat Inventory Allocation
=========================

Tracks how many seats of each ``SeatType`` the host offers.

Invariants
----------
* ``1 <= total <= capacity``
* ``sum(counts) <= total`` after every operation.  The allocation may be
  under-total (some seats unassigned) but never over-total.

Every operation clamps or refuses instead of raising, so a caller can
never push the allocation past these bounds.

Resizing
--------
* Growing the total puts the new seats in the ``any`` bucket.
* Shrinking the total trims buckets in ``SEAT_TRIM_ORDER`` (``any`` first,
  ``front`` last), taking as much as needed from each bucket before moving
  on.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .enums import SEAT_TRIM_ORDER, SEAT_TYPES, SeatType

logger = logging.getLogger(__name__)


def _fresh_counts(any_seats: int) -> dict[SeatType, int]:
    counts = {d.type: 0 for d in SEAT_TYPES}
    counts[SeatType.ANY] = any_seats
    return counts


class SeatAllocator:
    def __init__(self, capacity: int, total: Optional[int] = None):
        self.capacity = max(1, capacity)
        self.total = self._clamp(capacity if total is None else total)
        self.counts: dict[SeatType, int] = _fresh_counts(self.total)

    def _clamp(self, value: int) -> int:
        return min(self.capacity, max(1, value))

    # ── Queries ───────────────────────────────────────────────────

    def allocated_count(self) -> int:
        return sum(self.counts.values())

    def is_fully_allocated(self) -> bool:
        return self.allocated_count() == self.total

    @property
    def unassigned(self) -> int:
        return self.total - self.allocated_count()

    @property
    def at_capacity(self) -> bool:
        return self.total >= self.capacity

    def can_increment(self) -> bool:
        return self.allocated_count() < self.total

    def count(self, seat_type: SeatType) -> int:
        return self.counts[SeatType(seat_type)]

    # ── Per-type stepper ──────────────────────────────────────────

    def increment(self, seat_type: SeatType) -> bool:
        """Add one seat of *seat_type*.  Returns False when every seat is already allocated."""
        seat_type = SeatType(seat_type)
        if not self.can_increment():
            logger.debug(
                "Seat capacity reached (%d/%d); refusing %s",
                self.allocated_count(),
                self.total,
                seat_type.value,
            )
            return False
        self.counts[seat_type] += 1
        return True

    def decrement(self, seat_type: SeatType) -> bool:
        """Remove one seat of *seat_type*.  Returns False when the bucket is already empty."""
        seat_type = SeatType(seat_type)
        if self.counts[seat_type] <= 0:
            return False
        self.counts[seat_type] -= 1
        return True

    # ── Total stepper ─────────────────────────────────────────────

    def set_total(self, new_total: int) -> int:
        """Resize the offered total, clamped to ``[1, capacity]``.  Returns the applied total."""
        new_total = self._clamp(new_total)

        if new_total > self.total:
            self.counts[SeatType.ANY] += new_total - self.total
        elif new_total < self.total:
            excess = self.allocated_count() - new_total
            for seat_type in SEAT_TRIM_ORDER:
                if excess <= 0:
                    break
                cut = min(self.counts[seat_type], excess)
                self.counts[seat_type] -= cut
                excess -= cut

        self.total = new_total
        return new_total

    def increase_total(self) -> int:
        return self.set_total(self.total + 1)

    def decrease_total(self) -> int:
        return self.set_total(self.total - 1)

    def switch_vehicle(self, capacity: int, total: Optional[int] = None) -> None:
        """Adopt a new vehicle.  The previous distribution is discarded."""
        self.capacity = max(1, capacity)
        self.total = self._clamp(capacity if total is None else total)
        self.counts = _fresh_counts(self.total)

    # ── Serialisation ─────────────────────────────────────────────

    def seat_types(self) -> list[dict[str, Any]]:
        """Non-zero buckets in declaration order, as sent to the backend."""
        return [
            {"type": d.type.value, "label": d.label, "count": self.counts[d.type]}
            for d in SEAT_TYPES
            if self.counts[d.type] > 0
        ]
