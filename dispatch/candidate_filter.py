#Purpose: Hard eligibility filtering (rule gates) for Nearby Trucks.
#Builds the candidate set before scoring/ranking.
#Responsibilities:
#availability (Available only, when asked)
#exact truck type (when asked)
#minimum carrier reliability (when asked)
#within search radius of the pickup
#
#NOT a gate: capacity. An under-capacity truck can still be the best match
#(multiple trips); scoring handles it.
#
#Output: "rule-qualified trucks" (still not ranked).

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from core.errors import InvalidFilterError
from routing.geo import DistanceFn, Location, haversine_km, location_distance_km, resolve_location
from trucks.models import Truck, TruckType
from trucks.repository import TruckRepository

logger = logging.getLogger(__name__)

MIN_RADIUS_KM = 5.0
MAX_RADIUS_KM = 100.0
MIN_RATING = 0.0
MAX_RATING = 95.0


@dataclass(frozen=True)
class SearchFilters:
    """
    The filter panel of Nearby Trucks.

    truck_type None (or "all") means any type. min_rating None (or 0) means any rating.
    """
    radius_km: float = 50.0
    truck_type: Optional[Union[str, TruckType]] = None
    available_only: bool = True
    min_rating: Optional[float] = None

    def validate(self) -> "SearchFilters":
        """
        Checks ranges and returns a normalized copy (truck_type parsed).
        Out-of-range values raise InvalidFilterError; nothing is clamped.
        """
        try:
            radius = float(self.radius_km)
        except (TypeError, ValueError):
            raise InvalidFilterError(f"radius_km must be a number, got {self.radius_km!r}") from None
        if not MIN_RADIUS_KM <= radius <= MAX_RADIUS_KM:
            raise InvalidFilterError(
                f"radius_km must be between {MIN_RADIUS_KM:g} and {MAX_RADIUS_KM:g}, got {self.radius_km}"
            )

        min_rating = self.min_rating
        if min_rating is not None:
            try:
                min_rating = float(min_rating)
            except (TypeError, ValueError):
                raise InvalidFilterError(f"min_rating must be a number, got {self.min_rating!r}") from None
            if not MIN_RATING <= min_rating <= MAX_RATING:
                raise InvalidFilterError(
                    f"min_rating must be between {MIN_RATING:g} and {MAX_RATING:g}, got {self.min_rating}"
                )

        truck_type = self.truck_type
        if isinstance(truck_type, str) and truck_type.strip().lower() in ("", "all"):
            truck_type = None
        if truck_type is not None:
            try:
                truck_type = TruckType.parse(truck_type)
            except ValueError as e:
                raise InvalidFilterError(str(e)) from None

        return SearchFilters(
            radius_km=radius,
            truck_type=truck_type,
            available_only=bool(self.available_only),
            min_rating=min_rating,
        )


def parse_cargo_query(cargo_type: Union[str, TruckType], weight: float) -> TruckType:
    """
    Validates the load side of a query. Returns the parsed cargo type.
    """
    try:
        parsed = TruckType.parse(cargo_type)
    except ValueError as e:
        raise InvalidFilterError(str(e)) from None

    try:
        weight = float(weight)
    except (TypeError, ValueError):
        raise InvalidFilterError(f"weight must be a number, got {weight!r}") from None
    if not weight > 0:
        raise InvalidFilterError(f"weight must be > 0, got {weight}")
    return parsed


def passes_attribute_filters(truck: Truck, filters: SearchFilters) -> bool:
    """
    The cheap (no geometry) gates. `filters` must already be validated.
    """
    if filters.available_only and not truck.is_available:
        return False

    if filters.truck_type is not None and truck.truck_type != filters.truck_type:
        return False

    if filters.min_rating is not None and not truck.reliability_score >= filters.min_rating:
        return False

    return True


class CandidateResolver:
    """
    Produces the trucks within radius of a pickup that pass every hard filter.
    Read-only; safe to call concurrently.
    """

    def __init__(self, trucks: TruckRepository, distance_fn: DistanceFn = haversine_km):
        self.trucks = trucks
        self.distance_fn = distance_fn

    def resolve(
        self,
        pickup: Location,
        cargo_type: Union[str, TruckType],
        weight: float,
        filters: Optional[SearchFilters] = None,
    ) -> List[Truck]:
        """
        Returns candidates in repository order. An empty list means
        "no trucks nearby", which is a normal answer.
        """
        filters = (filters or SearchFilters()).validate()
        parse_cargo_query(cargo_type, weight)

        pickup_coord = resolve_location(pickup)
        if pickup_coord is None:
            logger.debug("Pickup %r is not a known location; no candidates", pickup)
            return []

        # 1. attribute gates first, geometry only for what's left
        eligible = [truck for truck in self.trucks.list_all() if passes_attribute_filters(truck, filters)]

        if hasattr(self.distance_fn, "prefetch"):
            coords = [resolve_location(truck.current_location) for truck in eligible]
            self.distance_fn.prefetch(pickup_coord, [c for c in coords if c is not None])

        # 2. radius gate
        candidates: List[Truck] = []
        for truck in eligible:
            distance = location_distance_km(pickup_coord, truck.current_location, self.distance_fn)
            if distance is None:
                # fail closed: unknown or unroutable is not "nearby"
                logger.debug("Truck %s at %r excluded: no distance to pickup", truck.id, truck.current_location)
                continue
            if distance > filters.radius_km:
                continue

            candidates.append(truck)

        logger.debug(
            "Resolved %d candidates of %d attribute-eligible trucks within %.0f km of %r",
            len(candidates), len(eligible), filters.radius_km, pickup,
        )
        return candidates
