"""Centralised application settings loaded from environment / .env file."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Geo-grid bucketing
    grid_cell_size_deg: float = 0.05  # ~5 km cells

    # Pricing
    base_fare: int = 30  # INR
    rate_per_km: int = 12  # INR / km
    fare_bump_amounts: tuple[int, ...] = (50, 100, 200)

    # Seat configuration fallbacks for vehicles without a seat count
    default_vehicle_capacity: int = 12
    default_total_seats: int = 4

    # Directions provider
    directions_url: str = "https://maps.googleapis.com/maps/api/directions/json"
    google_maps_api_key: str = ""
    directions_timeout_seconds: Optional[float] = None  # None = wait forever

    # Ride backend
    backend_url: str = "http://localhost:3000"

    # Drafts idle longer than this are dropped
    draft_ttl_seconds: Optional[float] = 3600.0

    # API
    rate_limit: str = "100/minute"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
