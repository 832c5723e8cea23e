"""FastAPI dependency injection helpers."""

from fastapi import Request

from ridehost.config import settings
from ridehost.domain.pricing import FareEstimator
from ridehost.infrastructure.backend import BackendClient
from ridehost.infrastructure.directions import DirectionsClient
from ridehost.infrastructure.draft_store import DraftStore


def get_directions_client(request: Request) -> DirectionsClient:
    return request.app.state.directions


def get_backend_client(request: Request) -> BackendClient:
    return request.app.state.backend


def get_draft_store(request: Request) -> DraftStore:
    return request.app.state.drafts


def get_fare_estimator() -> FareEstimator:
    return FareEstimator(base_fare=settings.base_fare, rate_per_km=settings.rate_per_km)
