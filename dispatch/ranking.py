"""
Purpose: Turn candidate trucks into an ordered Nearby Trucks list.
What it does:
For every candidate computes distance to pickup, ETA, match score (with its
breakdown) and the pickup->truck bearing for the map, then sorts by the
requested option.

Sort options:
  matchScore  highest score first (default)
  distance    nearest first
  eta         earliest pickup first
  rating      highest carrier reliability first

Ties always fall back to nearest first, then truck id ascending, so the same
inputs give the same order every time.

Rule: Pure. Re-run on every filter/sort change; nothing is cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from core.errors import InvalidFilterError
from loads.models import Load
from routing.eta_service import estimate_eta_minutes
from routing.geo import DistanceFn, bearing_degrees, haversine_km, location_distance_km, resolve_location
from trucks.models import Truck

from .policy import MatchingPolicy, default_matching_policy
from .scoring import MatchScorer, ScoreBreakdown

logger = logging.getLogger(__name__)


class SortOption(str, Enum):
    MATCH_SCORE = "matchScore"
    DISTANCE = "distance"
    ETA = "eta"
    RATING = "rating"

    @classmethod
    def parse(cls, value: Union[str, "SortOption", None]) -> "SortOption":
        if value is None:
            return cls.MATCH_SCORE
        if isinstance(value, SortOption):
            return value
        wanted = str(value).replace("_", "").lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.replace("_", "").lower()):
                return member
        raise InvalidFilterError(f"Unknown sort option: {value!r}")


@dataclass(frozen=True)
class MatchResult:
    """
    One row of Nearby Trucks. Derived on every query, never stored.
    """
    truck_id: str
    distance_km: float
    eta_minutes: int
    match_score: int
    breakdown: ScoreBreakdown
    bearing_degrees: float
    truck: Truck

    @property
    def carrier_name(self) -> str:
        return self.truck.carrier_name

    @property
    def reliability_score(self) -> float:
        return self.truck.reliability_score


SortKey = Callable[[MatchResult], Tuple]

_SORT_KEYS: Dict[SortOption, SortKey] = {
    SortOption.MATCH_SCORE: lambda r: (-r.match_score, r.distance_km, r.truck_id),
    SortOption.DISTANCE: lambda r: (r.distance_km, r.truck_id),
    SortOption.ETA: lambda r: (r.eta_minutes, r.distance_km, r.truck_id),
    SortOption.RATING: lambda r: (-r.reliability_score, r.distance_km, r.truck_id),
}


class RankingPipeline:

    def __init__(
        self,
        policy: Optional[MatchingPolicy] = None,
        scorer: Optional[MatchScorer] = None,
        distance_fn: DistanceFn = haversine_km,
    ):
        self.policy = policy or default_matching_policy()
        self.scorer = scorer or MatchScorer(self.policy)
        self.distance_fn = distance_fn

    def build_result(self, load: Load, truck: Truck, pickup_coord, radius_km: float) -> Optional[MatchResult]:
        truck_coord = resolve_location(truck.current_location)
        distance = location_distance_km(pickup_coord, truck_coord, self.distance_fn)
        if distance is None:
            return None

        breakdown = self.scorer.breakdown(load, truck, distance, radius_km)
        return MatchResult(
            truck_id=truck.id,
            distance_km=distance,
            eta_minutes=estimate_eta_minutes(distance, self.policy.average_speed_kmh),
            match_score=breakdown.total,
            breakdown=breakdown,
            bearing_degrees=bearing_degrees(pickup_coord, truck_coord),
            truck=truck,
        )

    def rank(
        self,
        candidates: Sequence[Truck],
        load: Load,
        sort_by: Union[str, SortOption, None] = SortOption.MATCH_SCORE,
        *,
        radius_km: Optional[float] = None,
    ) -> List[MatchResult]:
        """
        radius_km is the proximity scale; None means policy.default_radius_km.
        """
        option = SortOption.parse(sort_by)
        radius_km = self.policy.default_radius_km if radius_km is None else float(radius_km)

        pickup_coord = resolve_location(load.pickup)
        if pickup_coord is None:
            logger.debug("Load %s pickup %r is not a known location", load.id, load.pickup)
            return []

        results: List[MatchResult] = []
        for truck in candidates:
            result = self.build_result(load, truck, pickup_coord, radius_km)
            if result is None:
                logger.debug("Truck %s dropped from ranking: location unresolvable", truck.id)
                continue
            results.append(result)

        results.sort(key=_SORT_KEYS[option])
        return results
