"""
FastAPI application factory.

* Registers routes for health, stateless planning and ride drafts.
* Opens / closes the shared HTTP client for the directions provider and
  the ride backend via lifespan events.
* Maps domain errors to HTTP responses and applies rate limiting.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ridehost.api.middleware import limiter
from ridehost.api.routes import drafts, health, planning
from ridehost.config import settings
from ridehost.domain.exceptions import (
    BackendError,
    DraftNotFoundError,
    DraftNotReadyError,
    InvalidFareAdjustment,
    NoRouteFoundError,
    RideHostError,
    RouteLookupSuperseded,
)
from ridehost.infrastructure.backend import BackendClient
from ridehost.infrastructure.directions import DirectionsClient
from ridehost.infrastructure.draft_store import DraftStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[RideHostError], int] = {
    NoRouteFoundError: 422,
    InvalidFareAdjustment: 422,
    RouteLookupSuperseded: 409,
    DraftNotReadyError: 409,
    DraftNotFoundError: 404,
    BackendError: 502,
}


async def _domain_error_handler(request: Request, exc: RideHostError) -> JSONResponse:
    status = next(
        (ERROR_STATUS[cls] for cls in type(exc).__mro__ if cls in ERROR_STATUS),
        500,
    )
    if status >= 500:
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the outbound HTTP client on startup; close it on shutdown."""
    async with httpx.AsyncClient() as http:
        app.state.directions = DirectionsClient(
            http,
            settings.directions_url,
            settings.google_maps_api_key,
            timeout=settings.directions_timeout_seconds,
        )
        app.state.backend = BackendClient(http, settings.backend_url)
        app.state.drafts = DraftStore(ttl_seconds=settings.draft_ttl_seconds)
        yield
    logger.info("Outbound HTTP client closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Ride Host API",
        description=(
            "Plans carpool rides for hosts: tags routes with grid cells for "
            "matching, recommends a fare from the route distance, and keeps "
            "per-type seat allocations within the offered total."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors
    app.add_exception_handler(RideHostError, _domain_error_handler)

    # Routers
    app.include_router(health.router, prefix="/api/v1")
    app.include_router(planning.router, prefix="/api/v1")
    app.include_router(drafts.router, prefix="/api/v1")

    return app
