from __future__ import annotations

from typing import Dict, List, Optional, Tuple

LatLon = Tuple[float, float]


class RoadDistanceProvider:
    """
    Adapts routing.osrm_client.OSRMClient into a `distance_fn` the matching
    engine accepts in place of straight-line haversine distance.

    Road distances are cached per (origin, destination) pair; `prefetch` loads
    a whole pickup -> trucks row in one /table call so the resolver doesn't
    fire one HTTP request per truck.
    """

    def __init__(self, osrm_client):
        self.osrm_client = osrm_client
        self._cache: Dict[Tuple[float, float, float, float], Optional[float]] = {}

    def prefetch(self, origin: LatLon, destinations: List[LatLon]) -> None:
        """
        Fetch origin -> every destination in one request and cache it (km).
        """
        missing = [d for d in destinations if self._key(origin, d) not in self._cache]
        if not missing:
            return

        table = self.osrm_client.compute_table([origin], missing)
        distances = table.get("distances") or [[]]
        row = distances[0] if distances else []

        for dest_idx, dest in enumerate(missing):
            metres = row[dest_idx] if dest_idx < len(row) else None
            self._cache[self._key(origin, dest)] = None if metres is None else float(metres) / 1000.0

    def __call__(self, origin: LatLon, destination: LatLon) -> Optional[float]:
        key = self._key(origin, destination)
        if key not in self._cache:
            # Not prefetched: fetch just this pair.
            self.prefetch(origin, [destination])
        return self._cache.get(key)

    @staticmethod
    def _key(origin: LatLon, destination: LatLon) -> Tuple[float, float, float, float]:
        return (origin[0], origin[1], destination[0], destination[1])


def road_distance_provider_from_osrm_client(osrm_client) -> RoadDistanceProvider:
    return RoadDistanceProvider(osrm_client)
