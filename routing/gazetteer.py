"""
Purpose: Offline place-name lookup for load pickups and truck positions.
What it does:
Maps the city names shippers and carriers type into the app ("Pune",
"Navi Mumbai, Maharashtra") onto approximate city-centre coordinates.

Rule: lookup only. Unknown names return None; they are never guessed.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

LatLon = Tuple[float, float]

# City centre coordinates (lat, lon), keyed by lower-case city name.
CITY_COORDINATES: Dict[str, LatLon] = {
    "agra": (27.1767, 78.0081),
    "ahmedabad": (23.0225, 72.5714),
    "amritsar": (31.6340, 74.8723),
    "aurangabad": (19.8762, 75.3433),
    "bengaluru": (12.9716, 77.5946),
    "bhopal": (23.2599, 77.4126),
    "bhiwandi": (19.2813, 73.0483),
    "bhubaneswar": (20.2961, 85.8245),
    "chandigarh": (30.7333, 76.7794),
    "chennai": (13.0827, 80.2707),
    "coimbatore": (11.0168, 76.9558),
    "delhi": (28.7041, 77.1025),
    "faridabad": (28.4089, 77.3178),
    "ghaziabad": (28.6692, 77.4538),
    "gurugram": (28.4595, 77.0266),
    "guwahati": (26.1445, 91.7362),
    "hyderabad": (17.3850, 78.4867),
    "indore": (22.7196, 75.8577),
    "jaipur": (26.9124, 75.7873),
    "jamshedpur": (22.8046, 86.2029),
    "kalyan": (19.2437, 73.1355),
    "kanpur": (26.4499, 80.3319),
    "kochi": (9.9312, 76.2673),
    "kolkata": (22.5726, 88.3639),
    "lucknow": (26.8467, 80.9462),
    "ludhiana": (30.9010, 75.8573),
    "madurai": (9.9252, 78.1198),
    "mumbai": (19.0760, 72.8777),
    "mysuru": (12.2958, 76.6394),
    "nagpur": (21.1458, 79.0882),
    "nashik": (19.9975, 73.7898),
    "navi mumbai": (19.0330, 73.0297),
    "noida": (28.5355, 77.3910),
    "panvel": (18.9894, 73.1175),
    "patna": (25.5941, 85.1376),
    "pune": (18.5204, 73.8567),
    "raipur": (21.2514, 81.6296),
    "rajkot": (22.3039, 70.8022),
    "ranchi": (23.3441, 85.3096),
    "surat": (21.1702, 72.8311),
    "thane": (19.2183, 72.9781),
    "vadodara": (22.3072, 73.1812),
    "varanasi": (25.3176, 82.9739),
    "vijayawada": (16.5062, 80.6480),
    "visakhapatnam": (17.6868, 83.2185),
}

# Common alternate spellings people still type.
CITY_ALIASES: Dict[str, str] = {
    "bangalore": "bengaluru",
    "bombay": "mumbai",
    "calcutta": "kolkata",
    "madras": "chennai",
    "gurgaon": "gurugram",
    "new delhi": "delhi",
    "mysore": "mysuru",
    "vizag": "visakhapatnam",
    "baroda": "vadodara",
    "cochin": "kochi",
}


def _normalize(name: str) -> str:
    return " ".join(name.strip().lower().split())


def lookup_city(name: str) -> Optional[LatLon]:
    """
    Resolve a place name to (lat, lon).

    Accepts "City" or "City, State"; matching is case and whitespace insensitive.
    """
    if not name:
        return None

    key = _normalize(name)
    if key in CITY_ALIASES:
        key = CITY_ALIASES[key]
    if key in CITY_COORDINATES:
        return CITY_COORDINATES[key]

    # "Pune, Maharashtra" -> "pune"
    if "," in key:
        return lookup_city(key.split(",", 1)[0])

    return None


def known_cities() -> list[str]:
    return sorted(CITY_COORDINATES)
