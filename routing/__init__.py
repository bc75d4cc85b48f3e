#Marks routing as a package.
#Re-exports the public API (distance, bearing, location resolving, ETA, OSRM
#adapters) so other modules import from routing without knowing internal file names.
#No business logic.

from .geo import (
    LatLon,
    Location,
    bearing_degrees,
    haversine_km,
    location_distance_km,
    resolve_location,
)
from .gazetteer import lookup_city
from .eta_service import estimate_eta_minutes
from .osrm_client import OSRMClient, OSRMError
from .matrix_adapter import RoadDistanceProvider, road_distance_provider_from_osrm_client

__all__ = [
    "LatLon",
    "Location",
    "bearing_degrees",
    "haversine_km",
    "location_distance_km",
    "resolve_location",
    "lookup_city",
    "estimate_eta_minutes",
    "OSRMClient",
    "OSRMError",
    "RoadDistanceProvider",
    "road_distance_provider_from_osrm_client",
]
