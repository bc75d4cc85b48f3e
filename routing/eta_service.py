#Purpose: ETA estimation policy.
#Converts a pickup distance into the "arrives in X min" figure shown next to
#each truck and used by the "eta" sort option.
#Fixed average-speed model. Not an input to match scoring.

import math


def estimate_eta_minutes(distance_km: float, average_speed_kmh: float) -> int:
    """
    Minutes for a truck to reach the pickup at a constant average speed.

    distance / speed * 60, rounded half-up to the nearest minute.
    Monotonic in distance, never negative.
    """
    if average_speed_kmh <= 0:
        raise ValueError("average_speed_kmh must be > 0")

    distance_km = max(0.0, float(distance_km))
    minutes = distance_km / average_speed_kmh * 60.0
    return int(math.floor(minutes + 0.5))
