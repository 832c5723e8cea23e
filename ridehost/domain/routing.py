"""
Route Metrics
=============

Turns a directions-provider response into a ``RouteSummary``.

* The overview polyline is decoded with the provider's fixed-point
  encoding (precision 1e-5 degrees).
* Distance and duration are taken from the first leg as reported by the
  provider; they are never recomputed from the polyline.
* Every polyline vertex is bucketed into a grid cell; both endpoints are
  bucketed separately.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import polyline

from .entities import GeoPoint, Place, RouteEndpoint, RouteMetrics, RouteSummary
from .exceptions import NoRouteFoundError
from .grid import GRID_SIZE_DEG, cell_of, cells_of

logger = logging.getLogger(__name__)

POLYLINE_PRECISION = 5

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def decode_polyline(encoded: str) -> list[GeoPoint]:
    """Decode an encoded polyline into an ordered list of points."""
    return [
        GeoPoint(lat, lng)
        for lat, lng in polyline.decode(encoded, POLYLINE_PRECISION)
    ]


def summarize_route(
    directions: dict[str, Any],
    start: Place,
    end: Place,
    cell_size_deg: float = GRID_SIZE_DEG,
) -> RouteSummary:
    """
    Build a ``RouteSummary`` from a raw directions response.

    Raises ``NoRouteFoundError`` when the status is not ``"OK"``, when no
    route is returned, or when the first route lacks a leg or a decodable
    polyline.
    """
    status = directions.get("status")
    routes = directions.get("routes") or []
    if status != "OK" or not routes:
        raise NoRouteFoundError(f"No route found (status={status})")

    route = routes[0]
    try:
        leg = route["legs"][0]
        distance_m = leg["distance"]["value"]
        duration_s = leg["duration"]["value"]
        encoded = route["overview_polyline"]["points"]
        path = decode_polyline(encoded)
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise NoRouteFoundError("Directions response has no usable route") from exc

    metrics = RouteMetrics(
        total_distance_km=distance_m / 1000,
        duration_minutes=duration_s / 60,
    )
    summary = RouteSummary(
        encoded_polyline=encoded,
        grids_covered=frozenset(cells_of(path, cell_size_deg)),
        metrics=metrics,
        start=RouteEndpoint(start.name, start.point, cell_of(start.point, cell_size_deg)),
        end=RouteEndpoint(end.name, end.point, cell_of(end.point, cell_size_deg)),
        path=tuple(path),
    )
    logger.info(
        "Route %s -> %s: %.1f km, %.0f min, %d grid cells",
        start.name,
        end.name,
        metrics.total_distance_km,
        metrics.duration_minutes,
        len(summary.grids_covered),
    )
    return summary


def format_duration(minutes: float) -> str:
    """
    Render *minutes* as ``"1d 2h 3m"``.

    Minutes are rounded half-up first.  Zero-valued units are omitted,
    except that minutes are always shown when every unit is zero.
    """
    total = round_half_up(minutes)
    days, rest = divmod(total, MINUTES_PER_DAY)
    hours, mins = divmod(rest, MINUTES_PER_HOUR)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if mins > 0 or not parts:
        parts.append(f"{mins}m")
    return " ".join(parts)
