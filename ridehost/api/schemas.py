"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from ridehost.domain.draft import RideDraft
from ridehost.domain.entities import GeoPoint, Place, RouteEndpoint, RouteSummary, Vehicle
from ridehost.domain.enums import SEAT_TYPES
from ridehost.domain.pricing import FareQuote
from ridehost.domain.routing import format_duration
from ridehost.domain.seats import SeatAllocator


# ── Requests ──────────────────────────────────────────────────────────


class PlaceRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> Place:
        return Place(
            name=self.name,
            point=GeoPoint(self.latitude, self.longitude),
            address=self.address,
        )


class RouteRequest(BaseModel):
    start: PlaceRequest
    end: PlaceRequest


class DraftCreateRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=128)
    name: Optional[str] = None
    profile_image: Optional[str] = None


class DraftUpdateRequest(BaseModel):
    departure_time: Optional[datetime] = None
    extra_hours: Optional[int] = Field(None, ge=0, le=23)
    extra_minutes: Optional[int] = Field(None, ge=0, le=59)
    pets_allowed: Optional[bool] = None
    smoking_allowed: Optional[bool] = None
    luggage_space: Optional[bool] = None


class VehicleSelectRequest(BaseModel):
    index: int = Field(..., ge=0)


class SeatTotalRequest(BaseModel):
    total: int = Field(..., description="Clamped to [1, vehicle capacity].")


class FareExtraRequest(BaseModel):
    amount: int


class FareBumpRequest(BaseModel):
    amount: int = Field(..., gt=0)


# ── Responses ─────────────────────────────────────────────────────────


class GeoPointResponse(BaseModel):
    latitude: float
    longitude: float


class EndpointResponse(BaseModel):
    name: str
    latitude: float
    longitude: float
    grid: str

    @classmethod
    def from_domain(cls, endpoint: RouteEndpoint) -> "EndpointResponse":
        return cls(
            name=endpoint.name,
            latitude=endpoint.point.latitude,
            longitude=endpoint.point.longitude,
            grid=endpoint.grid,
        )


class MetricsResponse(BaseModel):
    total_distance_km: float
    duration_minutes: float
    duration_text: str


class RouteSummaryResponse(BaseModel):
    encoded_polyline: str
    grids_covered: list[str]
    metrics: MetricsResponse
    start: EndpointResponse
    end: EndpointResponse
    path: list[GeoPointResponse] = []

    @classmethod
    def from_domain(cls, summary: RouteSummary) -> "RouteSummaryResponse":
        return cls(
            encoded_polyline=summary.encoded_polyline,
            grids_covered=sorted(summary.grids_covered),
            metrics=MetricsResponse(
                total_distance_km=summary.metrics.total_distance_km,
                duration_minutes=summary.metrics.duration_minutes,
                duration_text=format_duration(summary.metrics.duration_minutes),
            ),
            start=EndpointResponse.from_domain(summary.start),
            end=EndpointResponse.from_domain(summary.end),
            path=[
                GeoPointResponse(latitude=p.latitude, longitude=p.longitude)
                for p in summary.path
            ],
        )


class FareResponse(BaseModel):
    recommended_fare: int
    extra_fare: int
    final_fare: int

    @classmethod
    def from_domain(cls, quote: FareQuote) -> "FareResponse":
        return cls(
            recommended_fare=quote.recommended_fare,
            extra_fare=quote.extra_fare,
            final_fare=quote.final_fare,
        )


class RouteQuoteResponse(BaseModel):
    route: RouteSummaryResponse
    fare: FareResponse


class GridCellResponse(BaseModel):
    cell: str


class SeatCountResponse(BaseModel):
    type: str
    label: str
    count: int


class SeatsResponse(BaseModel):
    total: int
    capacity: int
    allocated: int
    unassigned: int
    at_capacity: bool
    fully_allocated: bool
    counts: list[SeatCountResponse]

    @classmethod
    def from_domain(cls, seats: SeatAllocator) -> "SeatsResponse":
        return cls(
            total=seats.total,
            capacity=seats.capacity,
            allocated=seats.allocated_count(),
            unassigned=seats.unassigned,
            at_capacity=seats.at_capacity,
            fully_allocated=seats.is_fully_allocated(),
            counts=[
                SeatCountResponse(
                    type=d.type.value, label=d.label, count=seats.counts[d.type]
                )
                for d in SEAT_TYPES
            ],
        )


class SeatOperationResponse(BaseModel):
    applied: bool
    seats: SeatsResponse


class VehicleResponse(BaseModel):
    brand: str
    model: str
    year: Optional[int] = None
    color: Optional[str] = None
    license_plate: Optional[str] = None
    total_seats: Optional[int] = None
    has_luggage_space: bool = False

    @classmethod
    def from_domain(cls, vehicle: Vehicle) -> "VehicleResponse":
        return cls(
            brand=vehicle.brand,
            model=vehicle.model,
            year=vehicle.year,
            color=vehicle.color,
            license_plate=vehicle.license_plate,
            total_seats=vehicle.total_seats,
            has_luggage_space=vehicle.has_luggage_space,
        )


class PreferencesResponse(BaseModel):
    pets_allowed: bool
    smoking_allowed: bool
    luggage_space: bool


class DraftResponse(BaseModel):
    id: str
    user_id: str
    route: Optional[RouteSummaryResponse] = None
    fare: Optional[FareResponse] = None
    seats: SeatsResponse
    vehicles: list[VehicleResponse]
    selected_vehicle_idx: int
    departure_time: Optional[datetime] = None
    extra_time_minutes: int
    preferences: PreferencesResponse

    @classmethod
    def from_domain(cls, draft: RideDraft) -> "DraftResponse":
        return cls(
            id=draft.id,
            user_id=draft.driver.user_id,
            route=RouteSummaryResponse.from_domain(draft.route) if draft.route else None,
            fare=FareResponse.from_domain(draft.fare) if draft.fare else None,
            seats=SeatsResponse.from_domain(draft.seats),
            vehicles=[VehicleResponse.from_domain(v) for v in draft.vehicles],
            selected_vehicle_idx=draft.selected_vehicle_idx,
            departure_time=draft.departure_time,
            extra_time_minutes=draft.extra_time_minutes,
            preferences=PreferencesResponse(
                pets_allowed=draft.preferences.pets_allowed,
                smoking_allowed=draft.preferences.smoking_allowed,
                luggage_space=draft.preferences.luggage_space,
            ),
        )


class PublishResponse(BaseModel):
    draft_id: str
    ride: dict[str, Any] = {}


class HealthResponse(BaseModel):
    status: str = "ok"

