"""
Directions provider client (Google Directions JSON API).

Returns the raw response; interpreting it is ``summarize_route``'s job.
Transport failures, HTTP error statuses and non-JSON bodies surface as
``DirectionsUnavailableError`` so callers treat them like "no route".
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ridehost.domain.entities import GeoPoint
from ridehost.domain.exceptions import DirectionsUnavailableError

logger = logging.getLogger(__name__)


def _latlng(point: GeoPoint) -> str:
    return f"{point.latitude},{point.longitude}"


class DirectionsClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        url: str,
        api_key: str,
        timeout: Optional[float] = None,
    ):
        self.http = http
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

    async def fetch_directions(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> dict[str, Any]:
        params = {
            "origin": _latlng(origin),
            "destination": _latlng(destination),
            "key": self.api_key,
        }
        try:
            resp = await self.http.get(
                self.url, params=params, timeout=httpx.Timeout(self.timeout)
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Directions request failed: %s", exc)
            raise DirectionsUnavailableError("Failed to calculate route") from exc

        if not isinstance(data, dict):
            raise DirectionsUnavailableError("Directions response is not a JSON object")
        return data
