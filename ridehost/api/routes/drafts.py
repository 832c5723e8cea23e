"""
Ride draft endpoints
====================

POST   /api/v1/drafts                               -- start a ride-creation session
GET    /api/v1/drafts/{draft_id}                    -- current draft state
PATCH  /api/v1/drafts/{draft_id}                    -- schedule and preferences
DELETE /api/v1/drafts/{draft_id}                    -- abandon the draft
PUT    /api/v1/drafts/{draft_id}/route              -- (re)compute the route and fare
DELETE /api/v1/drafts/{draft_id}/route              -- clear the route
PUT    /api/v1/drafts/{draft_id}/vehicle            -- select a vehicle
PUT    /api/v1/drafts/{draft_id}/seats/total        -- resize the offered total
POST   /api/v1/drafts/{draft_id}/seats/{type}/increment
POST   /api/v1/drafts/{draft_id}/seats/{type}/decrement
PUT    /api/v1/drafts/{draft_id}/fare/extra         -- set the extra fare
POST   /api/v1/drafts/{draft_id}/fare/bump          -- quick extra-fare increment
POST   /api/v1/drafts/{draft_id}/publish            -- send the ride to the backend
"""

import logging

from fastapi import APIRouter, Depends, Request

from ridehost.api.dependencies import (
    get_backend_client,
    get_directions_client,
    get_draft_store,
    get_fare_estimator,
)
from ridehost.api.middleware import limiter
from ridehost.api.schemas import (
    DraftCreateRequest,
    DraftResponse,
    DraftUpdateRequest,
    FareBumpRequest,
    FareExtraRequest,
    FareResponse,
    PublishResponse,
    RouteRequest,
    SeatOperationResponse,
    SeatsResponse,
    SeatTotalRequest,
    VehicleSelectRequest,
)
from ridehost.config import settings
from ridehost.domain.draft import NO_ROUTE_MESSAGE, RideDraft
from ridehost.domain.entities import Driver
from ridehost.domain.enums import SeatType
from ridehost.domain.exceptions import DraftNotReadyError, InvalidFareAdjustment
from ridehost.domain.pricing import FareEstimator, FareQuote
from ridehost.infrastructure.backend import BackendClient
from ridehost.infrastructure.directions import DirectionsClient
from ridehost.infrastructure.draft_store import DraftSession, DraftStore
from ridehost.workers.route_lookup import RouteLookup, refresh_route

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/drafts", tags=["drafts"])


def _fare_of(session: DraftSession) -> FareQuote:
    if session.draft.fare is None:
        raise DraftNotReadyError(NO_ROUTE_MESSAGE)
    return session.draft.fare


@router.post(
    "",
    status_code=201,
    response_model=DraftResponse,
    summary="Start a ride draft",
    responses={409: {"description": "The host has no vehicle with verified insurance."}},
)
@limiter.limit(settings.rate_limit)
async def create_draft(
    request: Request,
    body: DraftCreateRequest,
    backend: BackendClient = Depends(get_backend_client),
    directions: DirectionsClient = Depends(get_directions_client),
    store: DraftStore = Depends(get_draft_store),
):
    vehicles = await backend.get_verified_vehicles(body.user_id)
    if not vehicles:
        raise DraftNotReadyError(
            "No Verified Vehicle: you need at least one vehicle with verified "
            "insurance to create a ride."
        )

    draft = RideDraft(
        driver=Driver(body.user_id, body.name, body.profile_image),
        vehicles=vehicles,
        default_capacity=settings.default_vehicle_capacity,
        default_total=settings.default_total_seats,
    )
    store.add(DraftSession(draft, RouteLookup(directions, settings.grid_cell_size_deg)))
    logger.info("Draft %s opened for %s", draft.id, body.user_id)
    return DraftResponse.from_domain(draft)


@router.get("/{draft_id}", response_model=DraftResponse, summary="Get a ride draft")
@limiter.limit(settings.rate_limit)
async def get_draft(
    request: Request,
    draft_id: str,
    store: DraftStore = Depends(get_draft_store),
):
    return DraftResponse.from_domain(store.get(draft_id).draft)


@router.patch(
    "/{draft_id}",
    response_model=DraftResponse,
    summary="Update schedule and preferences",
)
@limiter.limit(settings.rate_limit)
async def update_draft(
    request: Request,
    draft_id: str,
    body: DraftUpdateRequest,
    store: DraftStore = Depends(get_draft_store),
):
    draft = store.get(draft_id).draft
    if body.departure_time is not None:
        draft.departure_time = body.departure_time
    if body.extra_hours is not None or body.extra_minutes is not None:
        hours, minutes = divmod(draft.extra_time_minutes, 60)
        draft.set_extra_time(
            body.extra_hours if body.extra_hours is not None else hours,
            body.extra_minutes if body.extra_minutes is not None else minutes,
        )
    for name in ("pets_allowed", "smoking_allowed", "luggage_space"):
        value = getattr(body, name)
        if value is not None:
            setattr(draft.preferences, name, value)
    return DraftResponse.from_domain(draft)


@router.delete("/{draft_id}", status_code=204, summary="Abandon a ride draft")
@limiter.limit(settings.rate_limit)
async def delete_draft(
    request: Request,
    draft_id: str,
    store: DraftStore = Depends(get_draft_store),
):
    if store.get(draft_id).publishing:
        raise DraftNotReadyError("This ride is already being published.")
    store.discard(draft_id)


# ── Route ─────────────────────────────────────────────────────────────


@router.put(
    "/{draft_id}/route",
    response_model=DraftResponse,
    summary="Compute the route and recommended fare",
    description=(
        "Starts a directions lookup for the draft.  A lookup still in flight "
        "for the same draft is cancelled and answers 409.  When no route is "
        "found the previous route is cleared."
    ),
)
@limiter.limit(settings.rate_limit)
async def set_route(
    request: Request,
    draft_id: str,
    body: RouteRequest,
    store: DraftStore = Depends(get_draft_store),
    estimator: FareEstimator = Depends(get_fare_estimator),
):
    session = store.get(draft_id)
    await refresh_route(
        session.draft,
        session.lookup,
        body.start.to_domain(),
        body.end.to_domain(),
        estimator,
    )
    return DraftResponse.from_domain(session.draft)


@router.delete("/{draft_id}/route", response_model=DraftResponse, summary="Clear the route")
@limiter.limit(settings.rate_limit)
async def clear_route(
    request: Request,
    draft_id: str,
    store: DraftStore = Depends(get_draft_store),
):
    session = store.get(draft_id)
    session.lookup.cancel()
    session.draft.clear_route()
    return DraftResponse.from_domain(session.draft)


# ── Vehicle & seats ───────────────────────────────────────────────────


@router.put("/{draft_id}/vehicle", response_model=DraftResponse, summary="Select a vehicle")
@limiter.limit(settings.rate_limit)
async def select_vehicle(
    request: Request,
    draft_id: str,
    body: VehicleSelectRequest,
    store: DraftStore = Depends(get_draft_store),
):
    draft = store.get(draft_id).draft
    draft.select_vehicle(body.index)
    return DraftResponse.from_domain(draft)


@router.put("/{draft_id}/seats/total", response_model=SeatsResponse, summary="Resize total seats")
@limiter.limit(settings.rate_limit)
async def set_total_seats(
    request: Request,
    draft_id: str,
    body: SeatTotalRequest,
    store: DraftStore = Depends(get_draft_store),
):
    seats = store.get(draft_id).draft.seats
    seats.set_total(body.total)
    return SeatsResponse.from_domain(seats)


@router.post(
    "/{draft_id}/seats/{seat_type}/increment",
    response_model=SeatOperationResponse,
    summary="Add one seat of a type",
)
@limiter.limit(settings.rate_limit)
async def increment_seat(
    request: Request,
    draft_id: str,
    seat_type: SeatType,
    store: DraftStore = Depends(get_draft_store),
):
    seats = store.get(draft_id).draft.seats
    applied = seats.increment(seat_type)
    return SeatOperationResponse(applied=applied, seats=SeatsResponse.from_domain(seats))


@router.post(
    "/{draft_id}/seats/{seat_type}/decrement",
    response_model=SeatOperationResponse,
    summary="Remove one seat of a type",
)
@limiter.limit(settings.rate_limit)
async def decrement_seat(
    request: Request,
    draft_id: str,
    seat_type: SeatType,
    store: DraftStore = Depends(get_draft_store),
):
    seats = store.get(draft_id).draft.seats
    applied = seats.decrement(seat_type)
    return SeatOperationResponse(applied=applied, seats=SeatsResponse.from_domain(seats))


# ── Fare ──────────────────────────────────────────────────────────────


@router.put("/{draft_id}/fare/extra", response_model=FareResponse, summary="Set the extra fare")
@limiter.limit(settings.rate_limit)
async def set_extra_fare(
    request: Request,
    draft_id: str,
    body: FareExtraRequest,
    store: DraftStore = Depends(get_draft_store),
):
    fare = _fare_of(store.get(draft_id))
    fare.set_extra(body.amount)
    return FareResponse.from_domain(fare)


@router.post("/{draft_id}/fare/bump", response_model=FareResponse, summary="Quick extra-fare increment")
@limiter.limit(settings.rate_limit)
async def bump_extra_fare(
    request: Request,
    draft_id: str,
    body: FareBumpRequest,
    store: DraftStore = Depends(get_draft_store),
):
    if body.amount not in settings.fare_bump_amounts:
        raise InvalidFareAdjustment(
            f"Bump must be one of {list(settings.fare_bump_amounts)}, got {body.amount}"
        )
    fare = _fare_of(store.get(draft_id))
    fare.bump(body.amount)
    return FareResponse.from_domain(fare)


# ── Publish ───────────────────────────────────────────────────────────


@router.post(
    "/{draft_id}/publish",
    response_model=PublishResponse,
    summary="Publish the ride",
    responses={
        409: {
            "description": (
                "Draft has no route, no verified vehicle, a past departure "
                "time, or is already being published."
            )
        },
        502: {"description": "The ride backend rejected or did not answer."},
    },
)
@limiter.limit(settings.rate_limit)
async def publish_draft(
    request: Request,
    draft_id: str,
    store: DraftStore = Depends(get_draft_store),
    backend: BackendClient = Depends(get_backend_client),
):
    session = store.get(draft_id)
    if session.publishing:
        raise DraftNotReadyError("This ride is already being published.")
    payload = session.draft.to_payload()

    session.publishing = True
    try:
        ride = await backend.create_ride(payload)
    finally:
        session.publishing = False
    store.discard(draft_id)
    return PublishResponse(draft_id=draft_id, ride=ride)
