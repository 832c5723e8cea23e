"""
Domain value objects and entities for the ride-creation flow.

``RouteSummary`` is created once per successful directions lookup and is
replaced wholesale on recompute; nothing mutates it in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def to_geojson(self) -> dict[str, Any]:
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}


@dataclass(frozen=True)
class Place:
    """A location picked by the host from place autocomplete."""

    name: str
    point: GeoPoint
    address: Optional[str] = None


@dataclass(frozen=True)
class RouteEndpoint:
    name: str
    point: GeoPoint
    grid: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "location": self.point.to_geojson(),
            "grid": self.grid,
        }


@dataclass(frozen=True)
class RouteMetrics:
    total_distance_km: float
    duration_minutes: float


@dataclass(frozen=True)
class RouteSummary:
    encoded_polyline: str
    grids_covered: frozenset[str]
    metrics: RouteMetrics
    start: RouteEndpoint
    end: RouteEndpoint
    path: tuple[GeoPoint, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "encodedPolyline": self.encoded_polyline,
            "gridsCovered": sorted(self.grids_covered),
            "metrics": {
                "totalDistanceKm": self.metrics.total_distance_km,
                "durationMinutes": self.metrics.duration_minutes,
            },
            "start": self.start.to_payload(),
            "end": self.end.to_payload(),
        }


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class Driver:
    user_id: str
    name: Optional[str] = None
    profile_image: Optional[str] = None


@dataclass
class Vehicle:
    brand: str = ""
    model: str = ""
    year: Optional[int] = None
    color: Optional[str] = None
    license_plate: Optional[str] = None
    total_seats: Optional[int] = None
    images: list[str] = field(default_factory=list)
    has_luggage_space: bool = False
    insurance_verified: bool = False

    @classmethod
    def from_profile(cls, data: dict[str, Any]) -> "Vehicle":
        """Build from a vehicle entry of the backend's driver profile."""
        return cls(
            brand=data.get("brand") or "",
            model=data.get("model") or "",
            year=data.get("year"),
            color=data.get("color"),
            license_plate=data.get("licensePlate"),
            total_seats=data.get("totalSeats") or None,
            images=list(data.get("images") or []),
            has_luggage_space=bool(data.get("hasLuggageSpace", False)),
            insurance_verified=bool(data.get("insuranceVerified", False)),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "brand": self.brand,
            "model": self.model,
            "year": self.year,
            "color": self.color,
            "licensePlate": self.license_plate,
            "image": self.images[0] if self.images else None,
            "hasLuggageSpace": self.has_luggage_space,
        }


@dataclass
class Preferences:
    pets_allowed: bool = False
    smoking_allowed: bool = False
    luggage_space: bool = False

    def to_payload(self) -> dict[str, bool]:
        return {
            "petsAllowed": self.pets_allowed,
            "smokingAllowed": self.smoking_allowed,
            "luggageSpace": self.luggage_space,
        }
