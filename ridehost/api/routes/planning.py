"""
Stateless planning endpoints
============================

GET  /api/v1/grid/cell       -- grid cell key for a coordinate
POST /api/v1/routes/summary  -- directions lookup -> route summary + fare
"""

from fastapi import APIRouter, Depends, Query, Request

from ridehost.api.dependencies import get_directions_client, get_fare_estimator
from ridehost.api.middleware import limiter
from ridehost.api.schemas import (
    FareResponse,
    GridCellResponse,
    RouteQuoteResponse,
    RouteRequest,
    RouteSummaryResponse,
)
from ridehost.config import settings
from ridehost.domain.entities import GeoPoint
from ridehost.domain.grid import cell_of
from ridehost.domain.pricing import FareEstimator
from ridehost.domain.routing import summarize_route
from ridehost.infrastructure.directions import DirectionsClient

router = APIRouter(tags=["planning"])


@router.get(
    "/grid/cell",
    response_model=GridCellResponse,
    summary="Grid cell for a coordinate",
)
@limiter.limit(settings.rate_limit)
async def grid_cell(
    request: Request,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
):
    return GridCellResponse(cell=cell_of(GeoPoint(lat, lng), settings.grid_cell_size_deg))


@router.post(
    "/routes/summary",
    response_model=RouteQuoteResponse,
    summary="Summarise a route and recommend a fare",
    responses={422: {"description": "No route found between the two places."}},
)
@limiter.limit(settings.rate_limit)
async def route_summary(
    request: Request,
    body: RouteRequest,
    directions: DirectionsClient = Depends(get_directions_client),
    estimator: FareEstimator = Depends(get_fare_estimator),
):
    start, end = body.start.to_domain(), body.end.to_domain()
    raw = await directions.fetch_directions(start.point, end.point)
    summary = summarize_route(raw, start, end, settings.grid_cell_size_deg)
    return RouteQuoteResponse(
        route=RouteSummaryResponse.from_domain(summary),
        fare=FareResponse.from_domain(estimator.quote(summary.metrics.total_distance_km)),
    )
