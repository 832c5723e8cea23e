"""Unit tests for seat inventory allocation."""

import pytest

from ridehost.domain.enums import SEAT_TRIM_ORDER, SEAT_TYPES, SeatType
from ridehost.domain.seats import SeatAllocator


def _counts(allocator: SeatAllocator) -> dict[str, int]:
    return {k.value: v for k, v in allocator.counts.items() if v}


class TestInitialState:
    def test_all_seats_in_any(self):
        seats = SeatAllocator(capacity=4)
        assert seats.total == 4
        assert _counts(seats) == {"any": 4}
        assert seats.is_fully_allocated()

    def test_total_clamped_to_capacity(self):
        seats = SeatAllocator(capacity=4, total=9)
        assert seats.total == 4

    def test_total_clamped_to_one(self):
        seats = SeatAllocator(capacity=4, total=0)
        assert seats.total == 1


class TestStepper:
    def test_increment_refused_when_full(self):
        seats = SeatAllocator(capacity=4)
        before = dict(seats.counts)
        assert seats.increment(SeatType.FRONT) is False
        assert seats.counts == before

    def test_decrement_then_increment(self):
        seats = SeatAllocator(capacity=4)
        assert seats.decrement(SeatType.ANY) is True
        assert seats.unassigned == 1
        assert seats.increment(SeatType.FRONT) is True
        assert _counts(seats) == {"front": 1, "any": 3}
        assert seats.is_fully_allocated()

    def test_decrement_floors_at_zero(self):
        seats = SeatAllocator(capacity=4)
        assert seats.decrement(SeatType.FRONT) is False
        assert seats.count(SeatType.FRONT) == 0

    def test_accepts_string_keys(self):
        seats = SeatAllocator(capacity=4)
        seats.decrement("any")
        assert seats.increment("backWindow") is True
        assert seats.count(SeatType.BACK_WINDOW) == 1

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            SeatAllocator(capacity=4).increment("roof")


class TestSetTotal:
    def test_shrink_then_grow(self):
        seats = SeatAllocator(capacity=4, total=4)
        assert seats.set_total(2) == 2
        assert _counts(seats) == {"any": 2}
        assert seats.total == 2

        seats.capacity = 6
        assert seats.set_total(5) == 5
        assert _counts(seats) == {"any": 5}

    def test_shrink_trims_reverse_order(self):
        seats = SeatAllocator(capacity=6, total=6)
        seats.counts = {t.type: 1 for t in SEAT_TYPES}
        seats.set_total(3)
        assert _counts(seats) == {"front": 1, "backWindow": 1, "backMiddle": 1}

    def test_shrink_empties_bucket_before_moving_on(self):
        seats = SeatAllocator(capacity=6, total=6)
        seats.counts.update({SeatType.ANY: 1, SeatType.THIRD_ROW: 2, SeatType.FRONT: 3})
        seats.set_total(4)
        assert _counts(seats) == {"front": 3, "thirdRow": 1}

    def test_shrink_when_under_allocated_keeps_counts(self):
        seats = SeatAllocator(capacity=6, total=6)
        seats.counts.update({SeatType.ANY: 0, SeatType.FRONT: 2})
        seats.set_total(3)
        assert _counts(seats) == {"front": 2}
        assert seats.total == 3

    def test_clamped_to_capacity(self):
        seats = SeatAllocator(capacity=4, total=2)
        assert seats.set_total(10) == 4
        assert seats.at_capacity
        assert _counts(seats) == {"any": 4}

    def test_clamped_to_one(self):
        seats = SeatAllocator(capacity=4)
        assert seats.set_total(-3) == 1
        assert seats.allocated_count() == 1

    def test_increase_decrease_total(self):
        seats = SeatAllocator(capacity=5, total=3)
        assert seats.increase_total() == 4
        assert seats.decrease_total() == 3
        assert seats.allocated_count() == 3

    def test_invariant_holds_across_operations(self):
        seats = SeatAllocator(capacity=7, total=5)
        ops = [
            lambda: seats.decrement(SeatType.ANY),
            lambda: seats.increment(SeatType.THIRD_ROW),
            lambda: seats.set_total(2),
            lambda: seats.increment(SeatType.FRONT),
            lambda: seats.set_total(7),
            lambda: seats.increment(SeatType.BACK_MIDDLE),
            lambda: seats.set_total(1),
        ]
        for op in ops:
            op()
            assert seats.allocated_count() <= seats.total <= seats.capacity


class TestSwitchVehicle:
    def test_resets_distribution(self):
        seats = SeatAllocator(capacity=4)
        seats.decrement(SeatType.ANY)
        seats.increment(SeatType.FRONT)
        seats.switch_vehicle(7, 6)
        assert seats.capacity == 7
        assert seats.total == 6
        assert _counts(seats) == {"any": 6}


class TestSeatTypes:
    def test_trim_order_is_reverse_declaration(self):
        assert SEAT_TRIM_ORDER == tuple(d.type for d in reversed(SEAT_TYPES))

    def test_payload_lists_non_zero_in_declaration_order(self):
        seats = SeatAllocator(capacity=4)
        seats.decrement(SeatType.ANY)
        seats.decrement(SeatType.ANY)
        seats.increment(SeatType.BACK_WINDOW)
        seats.increment(SeatType.FRONT)
        assert seats.seat_types() == [
            {"type": "front", "label": "Front Seat", "count": 1},
            {"type": "backWindow", "label": "Back Window Seat", "count": 1},
            {"type": "any", "label": "Any Seat (No Preference)", "count": 2},
        ]
