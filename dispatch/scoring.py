#Purpose: Ranking signal (the “who is best” layer).
#Takes one load + one candidate truck + its pickup distance and produces a
#0-100 match score from four weighted factors:
#type compatibility, capacity fit, proximity, carrier reliability.
#Each factor is normalized to 0-100 before weighting.
#Pure function of (load, truck, distance, radius, policy): same inputs, same score.
#ETA is NOT a factor (see routing/eta_service.py).

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from loads.models import Load
from trucks.models import Truck

from .policy import MatchingPolicy, default_matching_policy


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Normalized factor values (each 0-100) behind a match score.
    """
    type_compatibility: float
    capacity_fit: float
    proximity: float
    reliability: float
    total: int


class MatchScorer:

    def __init__(self, policy: Optional[MatchingPolicy] = None):
        self.policy = policy or default_matching_policy()

    # --- factors ---

    def type_compatibility(self, load: Load, truck: Truck) -> float:
        return self.policy.compatibility(load.cargo_type, truck.truck_type)

    def capacity_fit(self, load: Load, truck: Truck) -> float:
        """
        100 inside [weight * min_ratio, weight * max_ratio].
        Below: proportional to capacity (0 at no capacity).
        Above: linear decay from 100 at the band top to 0 at twice the band top.
        """
        weight = load.weight_tons
        capacity = max(0.0, truck.load_capacity_tons)
        low = weight * self.policy.capacity_band_min_ratio
        high = weight * self.policy.capacity_band_max_ratio

        if low <= capacity <= high:
            return 100.0
        if capacity < low:
            return _clamp(100.0 * capacity / low)
        # idle capacity
        return _clamp(100.0 * (1.0 - (capacity - high) / high))

    def proximity(self, distance_km: float, radius_km: float) -> float:
        if radius_km <= 0:
            return 100.0 if distance_km <= 0 else 0.0
        return _clamp(100.0 * (1.0 - max(0.0, distance_km) / radius_km))

    def reliability(self, truck: Truck) -> float:
        return _clamp(float(truck.reliability_score))

    # --- composite ---

    def breakdown(self, load: Load, truck: Truck, distance_km: float, radius_km: float) -> ScoreBreakdown:
        p = self.policy
        type_score = self.type_compatibility(load, truck)
        capacity_score = self.capacity_fit(load, truck)
        proximity_score = self.proximity(distance_km, radius_km)
        reliability_score = self.reliability(truck)

        weighted = (
            p.type_weight * type_score
            + p.capacity_weight * capacity_score
            + p.proximity_weight * proximity_score
            + p.reliability_weight * reliability_score
        ) / 100.0

        return ScoreBreakdown(
            type_compatibility=type_score,
            capacity_fit=capacity_score,
            proximity=proximity_score,
            reliability=reliability_score,
            total=int(_clamp(_round_half_up(weighted))),
        )

    def score(self, load: Load, truck: Truck, distance_km: float, radius_km: float) -> int:
        """
        Integer match score in [0, 100].
        """
        return self.breakdown(load, truck, distance_km, radius_km).total
