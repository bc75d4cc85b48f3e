"""
Purpose: Orchestrator (the "glue") behind Nearby Trucks.
What it does:
One object the API/UI layer talks to. Wires the candidate resolver, scorer,
ranking pipeline and quote manager over the injected repositories:

    resolve_candidates -> rank_trucks -> (user picks one) -> request_quote

Rule: the engine itself holds no state besides its collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from bids.locks import KeyedLockManager
from bids.models import Bid, BidState
from bids.repository import BidRepository, InMemoryBidRepository
from loads.models import Load
from loads.repository import LoadRepository
from routing.geo import DistanceFn, Location, haversine_km
from trucks.models import Truck, TruckType
from trucks.repository import TruckRepository

from .candidate_filter import CandidateResolver, SearchFilters
from .policy import MatchingPolicy, default_matching_policy
from .quote_manager import Clock, QuoteRequestManager, utcnow
from .ranking import MatchResult, RankingPipeline, SortOption
from .scoring import MatchScorer


@dataclass(frozen=True)
class NearbySummary:
    """
    "3 trucks available nearby · Top match: 87%" on a load card.
    top_match_score is None when count is 0.
    """
    count: int
    top_match_score: Optional[int]


class MatchingEngine:

    def __init__(
        self,
        trucks: TruckRepository,
        loads: LoadRepository,
        bids: Optional[BidRepository] = None,
        *,
        policy: Optional[MatchingPolicy] = None,
        distance_fn: DistanceFn = haversine_km,
        lock_manager: Optional[KeyedLockManager] = None,
        clock: Clock = utcnow,
    ):
        self.policy = policy or default_matching_policy()
        self.policy.validate()

        self.trucks = trucks
        self.loads = loads
        self.bids = bids if bids is not None else InMemoryBidRepository()

        self.resolver = CandidateResolver(trucks, distance_fn=distance_fn)
        self.scorer = MatchScorer(self.policy)
        self.ranking = RankingPipeline(self.policy, self.scorer, distance_fn=distance_fn)
        self.quotes = QuoteRequestManager(
            trucks,
            loads,
            self.bids,
            policy=self.policy,
            lock_manager=lock_manager,
            clock=clock,
        )

    # --- matching ---

    def resolve_candidates(
        self,
        pickup: Location,
        cargo_type: Union[str, TruckType],
        weight: float,
        filters: Optional[SearchFilters] = None,
    ) -> List[Truck]:
        return self.resolver.resolve(pickup, cargo_type, weight, filters)

    def rank_trucks(
        self,
        candidates: Sequence[Truck],
        load: Load,
        sort_by: Union[str, SortOption, None] = SortOption.MATCH_SCORE,
        radius_km: Optional[float] = None,
    ) -> List[MatchResult]:
        """
        Scores and orders `candidates` for `load`.

        Proximity is scored against `radius_km`; when it is None the policy's
        default_radius_km is used instead. Callers that resolved candidates with
        another radius should pass it here, as find_nearby_trucks does.
        """
        return self.ranking.rank(candidates, load, sort_by, radius_km=radius_km)

    def find_nearby_trucks(
        self,
        load: Load,
        filters: Optional[SearchFilters] = None,
        sort_by: Union[str, SortOption, None] = SortOption.MATCH_SCORE,
    ) -> List[MatchResult]:
        """
        resolve + rank in one call, scoring proximity against the query radius.
        """
        filters = (filters or SearchFilters(radius_km=self.policy.default_radius_km)).validate()
        candidates = self.resolve_candidates(load.pickup, load.cargo_type, load.weight_tons, filters)
        return self.rank_trucks(candidates, load, sort_by, radius_km=filters.radius_km)

    def summarize_nearby(self, load: Load, radius_km: Optional[float] = None) -> NearbySummary:
        """
        Count of available trucks near the pickup plus the best match score.
        """
        filters = SearchFilters(
            radius_km=self.policy.summary_radius_km if radius_km is None else radius_km,
            available_only=True,
        )
        results = self.find_nearby_trucks(load, filters)
        return NearbySummary(
            count=len(results),
            top_match_score=results[0].match_score if results else None,
        )

    # --- quote requests ---

    def request_quote(self, truck_id: str, load_id: str) -> str:
        return self.quotes.request_quote(truck_id, load_id)

    def withdraw_quote(self, bid_id: str) -> None:
        self.quotes.withdraw_quote(bid_id)

    def get_active_bids_for_load(self, load_id: str) -> List[Bid]:
        return self.quotes.get_active_bids_for_load(load_id)

    def get_quote_state(self, load_id: str, truck_id: str) -> BidState:
        return self.quotes.get_quote_state(load_id, truck_id)

    # --- lookups ---

    def get_truck_by_id(self, truck_id: str) -> Optional[Truck]:
        return self.trucks.get(truck_id)
