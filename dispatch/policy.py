"""
Purpose: Central configuration for truck matching (single source of truth).
What it does:

Stores all tunable weights/thresholds for scoring, ETA and quote requests:

WEIGHTS (type / capacity / proximity / reliability) = 35 / 25 / 25 / 15

CAPACITY_BAND = 1.0x .. 1.5x load weight

AVERAGE_SPEED_KMH = 40

QUOTE_TTL_SECONDS = 24h

The weights and the capacity band came out of the marketplace's display
logic, not a pricing study. Treat them as policy and tune them here.

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Optional

from dotenv import load_dotenv

from trucks.models import TruckType

TypePair = FrozenSet[TruckType]


def _default_partial_compatibility() -> Dict[TypePair, float]:
    # Symmetric: a Container load can ride an Open body and vice versa.
    return {
        frozenset({TruckType.CONTAINER, TruckType.OPEN}): 40.0,
    }


@dataclass(frozen=True)
class MatchingPolicy:
    """
    Central configuration for candidate scoring and quote requests.
    """

    # --- Score weights (percent, must sum to 100) ---
    type_weight: int = 35
    capacity_weight: int = 25
    proximity_weight: int = 25
    reliability_weight: int = 15

    # --- Type compatibility ---
    # Score (0-100) for a truck type that isn't the cargo type but can still carry it.
    # Pairs not listed score 0.
    partial_compatibility: Dict[TypePair, float] = field(default_factory=_default_partial_compatibility)

    # --- Capacity fit band ---
    # Full marks while weight * min_ratio <= capacity <= weight * max_ratio.
    # Above the band the score decays to 0 at weight * (2 * max_ratio).
    capacity_band_min_ratio: float = 1.0
    capacity_band_max_ratio: float = 1.5

    # --- ETA model ---
    average_speed_kmh: float = 40.0

    # --- Search radius ---
    default_radius_km: float = 50.0
    # "N trucks available nearby" banner on the load card
    summary_radius_km: float = 30.0

    # --- Quote requests ---
    # Pending requests older than this are expired by the sweep.
    quote_ttl_seconds: int = 24 * 60 * 60

    def compatibility(self, cargo_type: TruckType, truck_type: TruckType) -> float:
        if cargo_type == truck_type:
            return 100.0
        return float(self.partial_compatibility.get(frozenset({cargo_type, truck_type}), 0.0))

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup.
        """
        weights = (self.type_weight, self.capacity_weight, self.proximity_weight, self.reliability_weight)
        if any(w < 0 for w in weights):
            raise ValueError("score weights must be >= 0")
        if sum(weights) != 100:
            raise ValueError(f"score weights must sum to 100, got {sum(weights)}")

        for pair, value in self.partial_compatibility.items():
            if len(pair) != 2:
                raise ValueError("partial_compatibility keys must be pairs of two different truck types")
            if not 0 <= value <= 100:
                raise ValueError("partial_compatibility scores must be within 0-100")

        if not self.capacity_band_min_ratio > 0:
            raise ValueError("capacity_band_min_ratio must be > 0")
        if not self.capacity_band_max_ratio >= self.capacity_band_min_ratio:
            raise ValueError("capacity_band_max_ratio must be >= capacity_band_min_ratio")

        if not self.average_speed_kmh > 0:
            raise ValueError("average_speed_kmh must be > 0")

        if not (self.default_radius_km > 0 and self.summary_radius_km > 0):
            raise ValueError("radius defaults must be > 0")

        if not self.quote_ttl_seconds > 0:
            raise ValueError("quote_ttl_seconds must be > 0")


def default_matching_policy() -> MatchingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = MatchingPolicy()
    p.validate()
    return p


def proximity_first_policy() -> MatchingPolicy:
    """
    Example: urgent pickups, where a close truck beats a perfect-fit one.
    """
    p = MatchingPolicy(
        type_weight=30,
        capacity_weight=15,
        proximity_weight=45,
        reliability_weight=10,
    )
    p.validate()
    return p


def policy_from_env(base: Optional[MatchingPolicy] = None) -> MatchingPolicy:
    """
    Default policy with overrides from the environment / .env file:

    MATCH_AVERAGE_SPEED_KMH=35
    MATCH_DEFAULT_RADIUS_KM=50
    MATCH_QUOTE_TTL_SECONDS=86400
    """
    load_dotenv()
    p = base or MatchingPolicy()

    overrides = {}
    speed = os.getenv("MATCH_AVERAGE_SPEED_KMH")
    if speed:
        overrides["average_speed_kmh"] = float(speed)
    radius = os.getenv("MATCH_DEFAULT_RADIUS_KM")
    if radius:
        overrides["default_radius_km"] = float(radius)
    ttl = os.getenv("MATCH_QUOTE_TTL_SECONDS")
    if ttl:
        overrides["quote_ttl_seconds"] = int(ttl)

    if overrides:
        p = replace(p, **overrides)
    p.validate()
    return p
