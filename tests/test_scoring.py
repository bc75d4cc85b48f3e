import pytest

from dispatch.policy import MatchingPolicy
from dispatch.scoring import MatchScorer
from loads.models import Load
from trucks.models import Truck, TruckType


@pytest.fixture
def scorer():
    return MatchScorer()


@pytest.fixture
def load(pickup):
    return Load.new("L-1", pickup, "Mumbai", "Dry Van", 10)


def truck(truck_type=TruckType.DRY_VAN, capacity=10.0, reliability=80.0, truck_id="T-1"):
    return Truck.new(truck_id, truck_type, capacity, (0.0, 0.0), reliability_score=reliability)


def test_type_compatibility(scorer, load):
    assert scorer.type_compatibility(load, truck(TruckType.DRY_VAN)) == 100.0
    assert scorer.type_compatibility(load, truck(TruckType.TANKER)) == 0.0

    container_load = Load.new("L-2", "Pune", "Mumbai", "Container", 10)
    assert scorer.type_compatibility(container_load, truck(TruckType.OPEN)) == 40.0


@pytest.mark.parametrize(
    "capacity, expected",
    [
        (10.0, 100.0),   # exactly the load weight
        (12.0, 100.0),
        (15.0, 100.0),   # top of the 1.5x band
        (5.0, 50.0),     # half the weight: needs two trips
        (0.0, 0.0),
        (22.5, 50.0),    # halfway from band top to twice the band top
        (30.0, 0.0),
        (80.0, 0.0),
    ],
)
def test_capacity_fit(scorer, load, capacity, expected):
    assert scorer.capacity_fit(load, truck(capacity=capacity)) == pytest.approx(expected)


def test_capacity_fit_respects_policy_band(load):
    scorer = MatchScorer(MatchingPolicy(capacity_band_min_ratio=1.2, capacity_band_max_ratio=2.0))

    assert scorer.capacity_fit(load, truck(capacity=10.0)) == pytest.approx(100.0 * 10.0 / 12.0)
    assert scorer.capacity_fit(load, truck(capacity=20.0)) == 100.0


@pytest.mark.parametrize(
    "distance, expected",
    [(0, 100.0), (25, 50.0), (50, 0.0), (75, 0.0), (-3, 100.0)],
)
def test_proximity(scorer, distance, expected):
    assert scorer.proximity(distance, 50) == pytest.approx(expected)


def test_reliability_passes_through(scorer):
    assert scorer.reliability(truck(reliability=72.5)) == 72.5
    assert scorer.reliability(truck(reliability=0)) == 0.0
    assert scorer.reliability(truck(reliability=100)) == 100.0


@pytest.mark.parametrize("reliability", [float("nan"), 140, -10])
def test_out_of_range_reliability_never_reaches_the_scorer(reliability):
    with pytest.raises(ValueError):
        truck(reliability=reliability)


def test_score_bounds(scorer, load):
    perfect = truck(capacity=10.0, reliability=100)
    hopeless = truck(TruckType.TANKER, capacity=60.0, reliability=0)

    assert scorer.score(load, perfect, 0.0, 50) == 100
    assert scorer.score(load, hopeless, 50.0, 50) == 0


def test_score_is_deterministic(scorer, load):
    t = truck(capacity=13.0, reliability=77)
    scores = {scorer.score(load, t, 17.3, 50) for _ in range(20)}
    assert len(scores) == 1


def test_breakdown_total_matches_score(scorer, load):
    t = truck(capacity=7.0, reliability=64)
    breakdown = scorer.breakdown(load, t, 12.0, 50)

    assert breakdown.type_compatibility == 100.0
    assert breakdown.capacity_fit == pytest.approx(70.0)
    assert breakdown.proximity == pytest.approx(76.0)
    assert breakdown.reliability == 64.0
    assert breakdown.total == scorer.score(load, t, 12.0, 50)
    # 35 + 17.5 + 19 + 9.6 = 81.1
    assert breakdown.total == 81


def test_score_rounds_half_up():
    policy = MatchingPolicy(type_weight=50, capacity_weight=50, proximity_weight=0, reliability_weight=0)
    heavy = Load.new("L-HEAVY", "Pune", "Mumbai", "Dry Van", 100)

    # 50 * 100/100 + 50 * 1/100 = 50.5
    assert MatchScorer(policy).score(heavy, truck(capacity=1.0), 0.0, 50) == 51


def test_close_fitting_truck_beats_far_mismatched_one(scorer, load):
    a = truck(TruckType.DRY_VAN, capacity=12.0, reliability=90, truck_id="A")
    b = truck(TruckType.FLATBED, capacity=12.0, reliability=95, truck_id="B")

    score_a = scorer.score(load, a, 10.0, 50)
    score_b = scorer.score(load, b, 40.0, 50)

    assert score_a > score_b
    # 35 + 25 + 20 + 13.5 = 93.5 -> 94; 0 + 25 + 5 + 14.25 = 44.25 -> 44
    assert (score_a, score_b) == (94, 44)


def test_weights_are_policy(load):
    close_mismatch = truck(TruckType.FLATBED, capacity=10.0, reliability=50)

    default = MatchScorer().score(load, close_mismatch, 1.0, 50)
    proximity_heavy = MatchScorer(
        MatchingPolicy(type_weight=10, capacity_weight=10, proximity_weight=70, reliability_weight=10)
    ).score(load, close_mismatch, 1.0, 50)

    assert proximity_heavy > default
