"""
Fare Estimation  (Strategy Pattern)
===================================

Formula
-------
Recommended_Fare = round_half_up(Base_Fare + Distance_KM x Rate_Per_KM)

The host may add a non-negative extra on top; the published fare is
``recommended + extra``.  A fresh quote always starts with no extra, so a
recomputed route never inherits an adjustment made for an earlier one.

Pricing constants are injected at construction time.

Complexity: O(1) per quote.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .exceptions import InvalidFareAdjustment
from .routing import round_half_up

RATE_PER_KM = 12
BASE_FARE = 30


# ── Strategy hierarchy ────────────────────────────────────────────────


class PricingStrategy(ABC):
    @abstractmethod
    def calculate(
        self, distance_km: float, base_fare: float, rate_per_km: float
    ) -> float: ...


class DistancePricing(PricingStrategy):
    def calculate(
        self, distance_km: float, base_fare: float, rate_per_km: float
    ) -> float:
        return base_fare + distance_km * rate_per_km


# ── Quote ─────────────────────────────────────────────────────────────


@dataclass
class FareQuote:
    recommended_fare: int
    extra_fare: int = 0

    @property
    def final_fare(self) -> int:
        return self.recommended_fare + self.extra_fare

    def set_extra(self, amount: int) -> None:
        if amount < 0:
            raise InvalidFareAdjustment(f"Extra fare must be >= 0, got {amount}")
        self.extra_fare = amount

    def bump(self, amount: int) -> None:
        """Add *amount* to the current extra (quick +50 / +100 / +200 buttons)."""
        self.set_extra(self.extra_fare + amount)

    def clear_extra(self) -> None:
        self.extra_fare = 0


# ── Engine facade ─────────────────────────────────────────────────────


class FareEstimator:
    """High-level API used by the draft flow and the API layer."""

    def __init__(
        self,
        base_fare: float = BASE_FARE,
        rate_per_km: float = RATE_PER_KM,
        strategy: PricingStrategy | None = None,
    ):
        self.base_fare = base_fare
        self.rate_per_km = rate_per_km
        self.strategy = strategy or DistancePricing()

    def recommended_fare(self, distance_km: float) -> int:
        raw = self.strategy.calculate(distance_km, self.base_fare, self.rate_per_km)
        return round_half_up(raw)

    def quote(self, distance_km: float) -> FareQuote:
        return FareQuote(recommended_fare=self.recommended_fare(distance_km))
