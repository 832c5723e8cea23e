"""
Health endpoint
===============

GET /api/v1/health -- simple health check
"""

from fastapi import APIRouter, Request

from ridehost.api.middleware import limiter
from ridehost.api.schemas import HealthResponse
from ridehost.config import settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
@limiter.limit(settings.rate_limit)
async def health(request: Request):
    return HealthResponse()
