#Purpose: HTTP client for an OSRM road-routing server.
#Used when pickup distances should follow the road network instead of a
#straight line (see routing/matrix_adapter.py).
#Owns the OSRM wire details: (lon,lat) ordering, /route and /table URLs,
#and turning transport failures or non-Ok codes into OSRMError.
#No matching rules or scoring here.

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import requests
from dotenv import load_dotenv

from core.errors import UpstreamUnavailableError

# .env:
# BASE_URL=http://localhost:5000
load_dotenv()

logger = logging.getLogger(__name__)

#(lat, lon), same as routing.geo
LatLon = Tuple[float, float]


class OSRMError(UpstreamUnavailableError):
    """OSRM could not be reached or answered with a non-Ok code."""
    pass


class OSRMClient:
    """
    Thin wrapper over the OSRM HTTP API.

    Takes and returns coordinates as (lat, lon); distances come back in
    metres and durations in seconds, exactly as OSRM reports them.
    """

    def __init__(self, base_url: Optional[str] = None, profile: str = "driving", timeout: int = 5):
        self.base_url = (base_url or os.getenv("BASE_URL") or "").rstrip("/")
        self.timeout = timeout #seconds to wait for OSRM before giving up
        self.profile = profile #driving, walking, cycling

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set BASE_URL in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def format_coordinates(self, coords: List[LatLon]) -> str:
        """Convert list of (lat, lon) to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join(f"{lon},{lat}" for lat, lon in coords)

    def _get(self, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("OSRM request failed: %s", e)
            raise OSRMError(f"OSRM request failed: {e}") from e

        if data.get("code") != "Ok":
            logger.error("OSRM returned %s: %s", data.get("code"), data.get("message"))
            raise OSRMError(f"OSRM error: {data.get('message', 'Unknown error')}")
        return data

    #----------------
    # Public methods
    #----------------
    def compute_route(self, coordinates: List[LatLon]) -> Dict[str, float]:
        """
        Calls the OSRM /route endpoint.

        Returns:
            {"distance": metres, "duration": seconds}
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(coordinates)}"
        data = self._get(url, {"overview": "false"}) # we don't need the geometry

        route = data["routes"][0] #first route is OSRM's best
        return {
            "distance": route["distance"],
            "duration": route["duration"],
        }

    def compute_table(self, sources: List[LatLon], destinations: List[LatLon]) -> Dict[str, List[List[Optional[float]]]]:
        """
        Calls the OSRM /table endpoint (batch routing).

        Returns:
            {
                "distances": len(sources) x len(destinations) metres (None = unroutable),
                "durations": len(sources) x len(destinations) seconds (None = unroutable),
            }
        """
        if not sources or not destinations:
            return {"durations": [], "distances": []}

        if sources == destinations:
            # NxN: don't send the same points twice
            coordinates = self.format_coordinates(sources)
            params = {"annotations": "duration,distance"}
        else:
            coordinates = self.format_coordinates(list(sources) + list(destinations))
            params = {
                "sources": ";".join(str(i) for i in range(len(sources))),
                "destinations": ";".join(
                    str(i) for i in range(len(sources), len(sources) + len(destinations))
                ),
                "annotations": "duration,distance",
            }

        url = f"{self.base_url}/table/v1/{self.profile}/{coordinates}"
        data = self._get(url, params)

        return {
            "durations": data.get("durations", []),
            "distances": data.get("distances", []),
        }
