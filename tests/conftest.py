import math

import pytest

from routing.geo import EARTH_RADIUS_KM
from trucks.models import AvailabilityStatus, Truck, TruckType

KM_PER_DEGREE_LAT = EARTH_RADIUS_KM * math.pi / 180.0


@pytest.fixture
def pickup():
    # Pune city centre
    return (18.5204, 73.8567)


@pytest.fixture
def north_of(pickup):
    """
    Point `km` kilometres due north of the pickup. Along a meridian the
    great-circle distance is exactly the latitude delta, so tests can place
    trucks at known distances.
    """
    def _north_of(km, origin=None):
        lat, lon = origin or pickup
        return (lat + km / KM_PER_DEGREE_LAT, lon)
    return _north_of


@pytest.fixture
def make_truck(north_of):
    def _make_truck(
        truck_id,
        km=10.0,
        truck_type=TruckType.DRY_VAN,
        capacity=10.0,
        reliability=80.0,
        availability=AvailabilityStatus.AVAILABLE,
        location=None,
        **kwargs,
    ):
        return Truck.new(
            truck_id,
            truck_type,
            capacity,
            location if location is not None else north_of(km),
            availability=availability,
            reliability_score=reliability,
            carrier_name=kwargs.pop("carrier_name", f"Carrier of {truck_id}"),
            **kwargs,
        )
    return _make_truck
