"""
Ride backend client.

GET  {backend}/api/driver-profile/{user_id}  -- host's vehicles
POST {backend}/api/rides                     -- publish a ride
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ridehost.domain.entities import Vehicle
from ridehost.domain.exceptions import BackendError

logger = logging.getLogger(__name__)


class BackendClient:
    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def get_verified_vehicles(self, user_id: str) -> list[Vehicle]:
        """Vehicles with verified insurance.  A missing profile yields none."""
        try:
            resp = await self.http.get(f"{self.base_url}/api/driver-profile/{user_id}")
        except httpx.HTTPError as exc:
            logger.warning("Failed to load vehicles for %s: %s", user_id, exc)
            raise BackendError("Failed to load vehicles") from exc

        if not resp.is_success:
            logger.info("No driver profile for %s (HTTP %d)", user_id, resp.status_code)
            return []

        data = resp.json()
        vehicles = [Vehicle.from_profile(v) for v in data.get("vehicles") or []]
        return [v for v in vehicles if v.insurance_verified]

    async def create_ride(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self.http.post(f"{self.base_url}/api/rides", json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Publishing ride failed: %s", exc)
            raise BackendError("Could not reach the ride backend") from exc

        try:
            body = resp.json()
        except ValueError:
            body = {}

        if not resp.is_success:
            message = body.get("message") or body.get("error") or "Failed to publish ride"
            raise BackendError(message, status_code=resp.status_code)

        logger.info("Ride published for driver %s", payload["driver"]["userId"])
        return body
