#Purpose: Straight-line geometry between two points on the map.
#Sole responsibility: great-circle distance + bearing, and turning a raw
#Location (region string or coordinate) into a (lat, lon) pair.
#No filtering or scoring here.

from __future__ import annotations

import math
from typing import Callable, Optional, Tuple, Union

from .gazetteer import lookup_city

#internal coordinate type :(lat,lon)
LatLon = Tuple[float, float]

#a location is either a place name ("Pune, Maharashtra") or a coordinate
Location = Union[str, LatLon]

DistanceFn = Callable[[LatLon, LatLon], Optional[float]]

EARTH_RADIUS_KM = 6371.0088


def haversine_km(origin: LatLon, destination: LatLon) -> float:
    """
    Great-circle distance in kilometres between two (lat, lon) points.
    """
    lat1, lon1 = map(math.radians, origin)
    lat2, lon2 = map(math.radians, destination)

    d_lat = lat2 - lat1
    d_lon = lon2 - lon1

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # min() guards acos/asin domain against float drift on antipodal points
    c = 2 * math.asin(min(1.0, math.sqrt(a)))
    return EARTH_RADIUS_KM * c


def bearing_degrees(origin: LatLon, destination: LatLon) -> float:
    """
    Initial compass bearing from origin to destination, normalized into [0, 360).
    0 = north, 90 = east. Identical points return 0.0.

    Used by the map layer to place truck pins around the pickup pin.
    """
    if origin == destination:
        return 0.0

    lat1, lon1 = map(math.radians, origin)
    lat2, lon2 = map(math.radians, destination)
    d_lon = lon2 - lon1

    x = math.sin(d_lon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)

    bearing = math.degrees(math.atan2(x, y)) % 360.0
    # -0.0 % 360 and tiny negatives can land exactly on 360.0
    return 0.0 if bearing >= 360.0 else bearing


def resolve_location(location: Optional[Location]) -> Optional[LatLon]:
    """
    Turn a Location into a (lat, lon) pair.

    - tuples/lists are validated and returned as floats
    - strings are looked up in the gazetteer
    - anything unknown or out of range returns None (caller decides what that means)
    """
    if location is None:
        return None

    if isinstance(location, str):
        return lookup_city(location)

    try:
        lat, lon = location
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        return None

    if math.isnan(lat) or math.isnan(lon):
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return (lat, lon)


def location_distance_km(
    origin: Optional[Location],
    destination: Optional[Location],
    distance_fn: DistanceFn = haversine_km,
) -> Optional[float]:
    """
    Distance between two Locations, or None when either side can't be resolved.

    Never defaults to 0 for unknown places; a missing coordinate must not look
    like a truck parked on top of the pickup.
    """
    origin_coord = resolve_location(origin)
    destination_coord = resolve_location(destination)
    if origin_coord is None or destination_coord is None:
        return None

    distance = distance_fn(origin_coord, destination_coord)
    if distance is None or math.isnan(distance):
        return None
    return max(0.0, float(distance))
