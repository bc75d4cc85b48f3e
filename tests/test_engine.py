import pytest

from bids.models import BidState
from core.errors import DuplicateRequestError, InvalidFilterError
from dispatch.candidate_filter import SearchFilters
from dispatch.engine import MatchingEngine, NearbySummary
from dispatch.policy import MatchingPolicy
from dispatch.ranking import SortOption
from loads.models import Load
from loads.repository import InMemoryLoadRepository
from trucks.models import AvailabilityStatus, TruckType
from trucks.repository import InMemoryTruckRepository


@pytest.fixture
def load(pickup):
    return Load.new("L1", pickup, "Mumbai", "Dry Van", 10)


@pytest.fixture
def trucks(make_truck):
    return InMemoryTruckRepository([
        make_truck("T-A", km=10, capacity=12, reliability=90),
        make_truck("T-B", km=40, truck_type=TruckType.FLATBED, capacity=12, reliability=95),
        make_truck("T-C", km=25, capacity=10, reliability=60, availability=AvailabilityStatus.BUSY),
        make_truck("T-D", km=70, capacity=10, reliability=99),
    ])


@pytest.fixture
def engine(trucks, load):
    return MatchingEngine(trucks, InMemoryLoadRepository([load]))


def ids(results):
    return [r.truck_id for r in results]


def test_find_nearby_trucks_defaults(engine, load):
    results = engine.find_nearby_trucks(load)

    # default radius 50km, available only
    assert ids(results) == ["T-A", "T-B"]
    assert results[0].match_score > results[1].match_score


def test_find_nearby_trucks_with_filters_and_sort(engine, load):
    filters = SearchFilters(radius_km=100, available_only=False)

    by_rating = engine.find_nearby_trucks(load, filters, "rating")
    by_distance = engine.find_nearby_trucks(load, filters, SortOption.DISTANCE)

    assert ids(by_rating) == ["T-D", "T-B", "T-A", "T-C"]
    assert ids(by_distance) == ["T-A", "T-C", "T-B", "T-D"]


def test_find_nearby_trucks_validates(engine, load):
    with pytest.raises(InvalidFilterError):
        engine.find_nearby_trucks(load, SearchFilters(radius_km=2))
    with pytest.raises(InvalidFilterError):
        engine.find_nearby_trucks(load, sort_by="cheapest")


def test_resolve_then_rank(engine, load):
    candidates = engine.resolve_candidates(load.pickup, "Dry Van", 10, SearchFilters(radius_km=50))
    results = engine.rank_trucks(candidates, load, "distance", radius_km=50)

    assert ids(results) == ["T-A", "T-B"]
    assert results == engine.find_nearby_trucks(load, SearchFilters(radius_km=50), "distance")


def test_summarize_nearby(engine, load):
    summary = engine.summarize_nearby(load)

    # 30km, available only: T-C is busy, T-B is 40km out.
    # T-A: 35 + 25 + 25 * (1 - 10/30) + 13.5 = 90.17
    assert summary == NearbySummary(count=1, top_match_score=90)

    wider = engine.summarize_nearby(load, radius_km=50)
    assert wider.count == 2


def test_summarize_nearby_with_no_trucks(pickup, make_truck):
    load = Load.new("L9", pickup, "Mumbai", "Dry Van", 10)
    engine = MatchingEngine(InMemoryTruckRepository([make_truck("T-FAR", km=90)]), InMemoryLoadRepository([load]))

    assert engine.summarize_nearby(load) == NearbySummary(count=0, top_match_score=None)


def test_quote_flow_through_engine(engine):
    assert engine.get_quote_state("L1", "T-A") == BidState.NO_REQUEST

    bid_id = engine.request_quote("T-A", "L1")
    with pytest.raises(DuplicateRequestError):
        engine.request_quote("T-A", "L1")
    assert [b.id for b in engine.get_active_bids_for_load("L1")] == [bid_id]

    engine.withdraw_quote(bid_id)
    assert engine.get_active_bids_for_load("L1") == []
    assert engine.get_quote_state("L1", "T-A") == BidState.WITHDRAWN


def test_get_truck_by_id(engine):
    assert engine.get_truck_by_id("T-B").truck_type == TruckType.FLATBED
    assert engine.get_truck_by_id("T-NOPE") is None


def test_engine_rejects_invalid_policy(trucks, load):
    with pytest.raises(ValueError):
        MatchingEngine(trucks, InMemoryLoadRepository([load]), policy=MatchingPolicy(type_weight=50))


def test_engine_uses_policy_radius(trucks, load):
    engine = MatchingEngine(trucks, InMemoryLoadRepository([load]), policy=MatchingPolicy(default_radius_km=20))
    assert ids(engine.find_nearby_trucks(load)) == ["T-A"]


def test_rank_trucks_defaults_to_policy_radius(engine, load):
    """
    Without radius_km, proximity is scored against policy.default_radius_km
    (50km), not the radius the candidates came from.
    """
    candidates = engine.resolve_candidates(load.pickup, "Dry Van", 10, SearchFilters(radius_km=80))
    assert ids(candidates) == ["T-A", "T-B", "T-D"]

    default = engine.rank_trucks(candidates, load)
    assert default == engine.rank_trucks(candidates, load, radius_km=engine.policy.default_radius_km)

    # T-D is 70km out: 0 proximity on a 50km scale, 25 * (1 - 70/80) on an 80km one
    scored_at_80 = engine.rank_trucks(candidates, load, radius_km=80)
    by_id = {r.truck_id: r for r in default}
    by_id_80 = {r.truck_id: r for r in scored_at_80}
    assert by_id["T-D"].breakdown.proximity == 0.0
    assert by_id_80["T-D"].breakdown.proximity == pytest.approx(12.5)
    assert (by_id["T-D"].match_score, by_id_80["T-D"].match_score) == (75, 78)
