import pytest

from core.errors import InvalidFilterError
from dispatch.candidate_filter import CandidateResolver, SearchFilters, parse_cargo_query
from trucks.models import AvailabilityStatus, TruckType
from trucks.repository import InMemoryTruckRepository


@pytest.fixture
def fleet(make_truck):
    return [
        make_truck("T-NEAR", km=5, truck_type=TruckType.DRY_VAN, reliability=90),
        make_truck("T-BUSY", km=8, truck_type=TruckType.DRY_VAN, availability=AvailabilityStatus.BUSY),
        make_truck("T-ENROUTE", km=9, truck_type=TruckType.FLATBED, availability=AvailabilityStatus.EN_ROUTE),
        make_truck("T-FLAT", km=20, truck_type=TruckType.FLATBED, reliability=60),
        make_truck("T-SMALL", km=30, truck_type=TruckType.DRY_VAN, capacity=2, reliability=75),
        make_truck("T-EDGE", km=49.9, truck_type=TruckType.CONTAINER, reliability=85),
        make_truck("T-OUT", km=50.2, truck_type=TruckType.DRY_VAN, reliability=99),
        make_truck("T-LOST", truck_type=TruckType.DRY_VAN, location="Nowhere Junction"),
    ]


@pytest.fixture
def resolver(fleet):
    return CandidateResolver(InMemoryTruckRepository(fleet))


def ids(trucks):
    return [truck.id for truck in trucks]


# --- filter validation ---

@pytest.mark.parametrize("radius", [5, 5.0, 50, 100])
def test_radius_bounds_are_inclusive(radius):
    assert SearchFilters(radius_km=radius).validate().radius_km == float(radius)


@pytest.mark.parametrize("radius", [4.9, 0, -10, 100.5, "far", None, float("nan")])
def test_out_of_range_radius_is_rejected_not_clamped(radius):
    with pytest.raises(InvalidFilterError):
        SearchFilters(radius_km=radius).validate()


@pytest.mark.parametrize("rating", [-1, 95.5, 100, "high", float("nan")])
def test_bad_min_rating_is_rejected(rating):
    with pytest.raises(InvalidFilterError):
        SearchFilters(min_rating=rating).validate()


def test_truck_type_normalization():
    assert SearchFilters(truck_type="all").validate().truck_type is None
    assert SearchFilters(truck_type="").validate().truck_type is None
    assert SearchFilters(truck_type="flatbed").validate().truck_type == TruckType.FLATBED
    assert SearchFilters(truck_type="32ft").validate().truck_type == TruckType.FT_32

    with pytest.raises(InvalidFilterError):
        SearchFilters(truck_type="hovercraft").validate()


def test_invalid_filter_error_is_a_value_error():
    with pytest.raises(ValueError):
        SearchFilters(radius_km=500).validate()


def test_parse_cargo_query():
    assert parse_cargo_query("Dry Van", 12) == TruckType.DRY_VAN

    with pytest.raises(InvalidFilterError):
        parse_cargo_query("Dry Van", 0)
    with pytest.raises(InvalidFilterError):
        parse_cargo_query("Dry Van", float("nan"))
    with pytest.raises(InvalidFilterError):
        parse_cargo_query("Dry Van", "nan")
    with pytest.raises(InvalidFilterError):
        parse_cargo_query("Dry Van", "heavy")
    with pytest.raises(InvalidFilterError):
        parse_cargo_query("Spaceship", 10)


# --- resolution ---

def test_available_only_excludes_busy_and_en_route(resolver, pickup):
    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=50))

    assert all(truck.availability == AvailabilityStatus.AVAILABLE for truck in candidates)
    assert "T-BUSY" not in ids(candidates)
    assert "T-ENROUTE" not in ids(candidates)


def test_available_only_false_keeps_everyone_in_radius(resolver, pickup):
    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=50, available_only=False))
    assert ids(candidates) == ["T-NEAR", "T-BUSY", "T-ENROUTE", "T-FLAT", "T-SMALL", "T-EDGE"]


def test_truck_type_filter_is_exact(resolver, pickup):
    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=100, truck_type="Flatbed"))
    assert ids(candidates) == ["T-FLAT"]


def test_min_rating_filter(resolver, pickup):
    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=100, min_rating=80))
    assert ids(candidates) == ["T-NEAR", "T-EDGE", "T-OUT"]


def test_min_rating_is_inclusive(resolver, pickup):
    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=100, min_rating=85))
    # T-EDGE sits exactly on 85
    assert ids(candidates) == ["T-NEAR", "T-EDGE", "T-OUT"]

    stricter = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=100, min_rating=85.5))
    assert ids(stricter) == ["T-NEAR", "T-OUT"]


def test_radius_invariant(resolver, pickup):
    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=50))

    assert "T-EDGE" in ids(candidates)
    assert "T-OUT" not in ids(candidates)

    narrow = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=10))
    assert ids(narrow) == ["T-NEAR"]


def test_capacity_is_not_a_hard_filter(resolver, pickup):
    # T-SMALL carries 2t; the load is 20t. Scoring penalizes it, filtering doesn't.
    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 20, SearchFilters(radius_km=50))
    assert "T-SMALL" in ids(candidates)


def test_type_mismatch_is_not_a_hard_filter_without_type_filter(resolver, pickup):
    candidates = resolver.resolve(pickup, TruckType.REFRIGERATED, 10, SearchFilters(radius_km=50))
    assert ids(candidates) == ["T-NEAR", "T-FLAT", "T-SMALL", "T-EDGE"]


def test_unknown_truck_location_is_excluded(resolver, pickup):
    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=100))
    assert "T-LOST" not in ids(candidates)


def test_unknown_pickup_yields_empty_list(resolver):
    assert resolver.resolve("Nowhere Junction", TruckType.DRY_VAN, 10) == []


def test_place_name_pickup(make_truck):
    resolver = CandidateResolver(InMemoryTruckRepository([
        make_truck("T-THANE", location="Thane"),
        make_truck("T-DELHI", location="Delhi"),
    ]))

    candidates = resolver.resolve("Mumbai, Maharashtra", "Dry Van", 10, SearchFilters(radius_km=50))

    assert ids(candidates) == ["T-THANE"]


def test_no_trucks_nearby_is_empty_not_error(pickup, make_truck):
    resolver = CandidateResolver(InMemoryTruckRepository([make_truck("T-FAR", km=90)]))
    assert resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=20)) == []


def test_invalid_query_raises(resolver, pickup):
    with pytest.raises(InvalidFilterError):
        resolver.resolve(pickup, TruckType.DRY_VAN, -1)
    with pytest.raises(InvalidFilterError):
        resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=101))


def test_unroutable_distance_excludes_truck(fleet, pickup):
    resolver = CandidateResolver(InMemoryTruckRepository(fleet), distance_fn=lambda a, b: None)
    assert resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=100)) == []


def test_nan_distance_excludes_truck(fleet, pickup):
    resolver = CandidateResolver(InMemoryTruckRepository(fleet), distance_fn=lambda a, b: float("nan"))
    assert resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=100)) == []


def test_resolver_prefetches_batch_providers(fleet, pickup):
    class RecordingProvider:
        def __init__(self):
            self.prefetched = []

        def prefetch(self, origin, destinations):
            self.prefetched.append((origin, list(destinations)))

        def __call__(self, origin, destination):
            return 1.0

    provider = RecordingProvider()
    resolver = CandidateResolver(InMemoryTruckRepository(fleet), distance_fn=provider)

    candidates = resolver.resolve(pickup, TruckType.DRY_VAN, 10, SearchFilters(radius_km=50))

    assert len(provider.prefetched) == 1
    origin, destinations = provider.prefetched[0]
    assert origin == pickup
    # one call for the attribute-eligible trucks with a known location
    assert len(destinations) == 5
    assert "T-OUT" in ids(candidates)
