"""
Shared test fixtures.

External collaborators (directions provider, ride backend) are replaced
by ``AsyncMock`` objects so tests run without network access or API keys.
"""

from __future__ import annotations

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ridehost.domain.entities import GeoPoint, Place, Vehicle

# Google's documented sample: (38.5, -120.2) -> (40.7, -120.95) -> (43.252, -126.453)
SAMPLE_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def make_directions(
    distance_m: int = 25_300,
    duration_s: int = 5_400,
    points: str = SAMPLE_POLYLINE,
    status: str = "OK",
) -> dict:
    return {
        "status": status,
        "routes": [
            {
                "legs": [
                    {
                        "distance": {"value": distance_m},
                        "duration": {"value": duration_s},
                    }
                ],
                "overview_polyline": {"points": points},
            }
        ],
    }


# ── Domain fixtures ───────────────────────────────────────────────────


@pytest.fixture
def airport() -> Place:
    return Place("Mumbai Airport", GeoPoint(19.0896, 72.8656), "Andheri East, Mumbai")


@pytest.fixture
def andheri() -> Place:
    return Place("Andheri", GeoPoint(19.1176, 72.8490))


@pytest.fixture
def directions_ok() -> dict:
    return make_directions()


@pytest.fixture
def sedan() -> Vehicle:
    return Vehicle(
        brand="Maruti",
        model="Dzire",
        year=2022,
        color="White",
        license_plate="MH01AB1234",
        total_seats=4,
        images=["https://img.example/dzire.jpg"],
        insurance_verified=True,
    )


@pytest.fixture
def suv() -> Vehicle:
    return Vehicle(brand="Toyota", model="Innova", total_seats=7, insurance_verified=True)


# ── API fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def directions_mock(directions_ok) -> AsyncMock:
    mock = AsyncMock()
    mock.fetch_directions.return_value = directions_ok
    return mock


@pytest.fixture
def backend_mock(sedan, suv) -> AsyncMock:
    mock = AsyncMock()
    mock.get_verified_vehicles.return_value = [sedan, suv]
    mock.create_ride.return_value = {"_id": "ride-1", "status": "published"}
    return mock


@pytest_asyncio.fixture
async def client(directions_mock, backend_mock) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient with mocked collaborators and a fresh draft store."""
    from ridehost.api.app import create_app
    from ridehost.api.dependencies import (
        get_backend_client,
        get_directions_client,
        get_draft_store,
    )
    from ridehost.api.middleware import limiter
    from ridehost.infrastructure.draft_store import DraftStore

    store = DraftStore()
    app = create_app()
    app.dependency_overrides[get_directions_client] = lambda: directions_mock
    app.dependency_overrides[get_backend_client] = lambda: backend_mock
    app.dependency_overrides[get_draft_store] = lambda: store

    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True
