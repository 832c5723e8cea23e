"""Unit tests for the ride draft (one ride-creation session)."""

from datetime import datetime

import pytest

from ridehost.domain.draft import RideDraft
from ridehost.domain.entities import Driver, Vehicle
from ridehost.domain.enums import SeatType
from ridehost.domain.exceptions import DraftNotReadyError
from ridehost.domain.pricing import FareEstimator
from ridehost.domain.routing import summarize_route

from conftest import make_directions


@pytest.fixture
def driver() -> Driver:
    return Driver("user_123", "Asha Rao", "https://img.example/asha.jpg")


@pytest.fixture
def draft(driver, sedan, suv) -> RideDraft:
    return RideDraft(driver=driver, vehicles=[sedan, suv])


@pytest.fixture
def summary(directions_ok, airport, andheri):
    return summarize_route(directions_ok, airport, andheri)


class TestSeatsFollowVehicle:
    def test_first_vehicle_sets_capacity(self, draft):
        assert draft.seats.capacity == 4
        assert draft.seats.total == 4

    def test_no_vehicles_uses_defaults(self, driver):
        draft = RideDraft(driver=driver, vehicles=[])
        assert draft.seats.capacity == 12
        assert draft.seats.total == 4

    def test_select_vehicle_resets_seats(self, draft):
        draft.seats.decrement(SeatType.ANY)
        draft.seats.increment(SeatType.FRONT)
        draft.select_vehicle(1)
        assert draft.selected_vehicle.model == "Innova"
        assert draft.seats.capacity == 7
        assert draft.seats.counts[SeatType.ANY] == 7
        assert draft.seats.counts[SeatType.FRONT] == 0

    def test_select_vehicle_without_seat_count_keeps_distribution(self, driver, sedan):
        draft = RideDraft(driver=driver, vehicles=[sedan, Vehicle(brand="Tata", model="Nexon")])
        draft.seats.decrement(SeatType.ANY)
        draft.seats.increment(SeatType.FRONT)
        draft.select_vehicle(1)
        assert draft.seats.capacity == 12
        assert draft.seats.counts[SeatType.FRONT] == 1

    def test_select_missing_vehicle(self, draft):
        with pytest.raises(DraftNotReadyError):
            draft.select_vehicle(5)


class TestRouteAndFare:
    def test_apply_route_quotes_fare(self, draft, summary):
        quote = draft.apply_route(summary, FareEstimator())
        assert quote.recommended_fare == 334
        assert draft.route is summary

    def test_recompute_resets_extra_fare(self, draft, summary):
        estimator = FareEstimator()
        draft.apply_route(summary, estimator)
        draft.fare.set_extra(100)
        assert draft.fare.final_fare == 434

        draft.apply_route(summary, estimator)
        assert draft.fare.extra_fare == 0
        assert draft.fare.final_fare == 334

    def test_clear_route(self, draft, summary):
        draft.apply_route(summary, FareEstimator())
        draft.clear_route()
        assert draft.route is None
        assert draft.fare is None

    def test_extra_time(self, draft):
        assert draft.set_extra_time(1, 15) == 75


class TestPayload:
    def test_requires_route(self, draft):
        with pytest.raises(DraftNotReadyError):
            draft.to_payload()

    def test_requires_vehicle(self, driver, summary):
        draft = RideDraft(driver=driver, vehicles=[])
        draft.apply_route(summary, FareEstimator())
        with pytest.raises(DraftNotReadyError):
            draft.to_payload()

    def test_payload(self, draft, summary):
        draft.apply_route(summary, FareEstimator())
        draft.fare.bump(50)
        draft.seats.decrement(SeatType.ANY)
        draft.seats.increment(SeatType.FRONT)
        draft.set_extra_time(0, 30)
        draft.preferences.pets_allowed = True
        draft.departure_time = datetime(2026, 10, 20, 8, 30)

        payload = draft.to_payload(now=datetime(2026, 10, 19, 9, 0))

        assert payload["driver"] == {
            "userId": "user_123",
            "name": "Asha Rao",
            "profileImage": "https://img.example/asha.jpg",
        }
        assert payload["pricing"] == {"baseFare": 384}
        assert payload["schedule"] == {
            "departureTime": "2026-10-20T08:30:00",
            "extraTimeMinutes": 30,
        }
        assert payload["seats"]["total"] == 4
        assert payload["seats"]["available"] == 4
        assert [s["type"] for s in payload["seats"]["seatTypes"]] == ["front", "any"]
        assert payload["vehicle"]["licensePlate"] == "MH01AB1234"
        assert payload["vehicle"]["image"] == "https://img.example/dzire.jpg"
        assert payload["preferences"]["petsAllowed"] is True
        assert payload["metrics"]["durationMinutes"] == pytest.approx(120.0)
        assert payload["route"]["metrics"]["durationMinutes"] == pytest.approx(90.0)

    def test_departure_defaults_to_now(self, draft, airport, andheri):
        draft.apply_route(
            summarize_route(make_directions(distance_m=10_000), airport, andheri),
            FareEstimator(),
        )
        now = datetime(2026, 1, 1, 9, 0)
        assert draft.to_payload(now=now)["schedule"]["departureTime"] == now.isoformat()
        assert draft.to_payload(now=now)["pricing"]["baseFare"] == 150

    def test_past_departure_rejected(self, draft, summary):
        draft.apply_route(summary, FareEstimator())
        draft.departure_time = datetime(2026, 10, 19, 8, 30)
        with pytest.raises(DraftNotReadyError, match="future"):
            draft.to_payload(now=datetime(2026, 10, 19, 9, 0))

    def test_departure_at_now_rejected(self, draft, summary):
        draft.apply_route(summary, FareEstimator())
        now = datetime(2026, 10, 19, 9, 0)
        draft.departure_time = now
        with pytest.raises(DraftNotReadyError):
            draft.to_payload(now=now)
