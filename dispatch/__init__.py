#Expose the high-level pipeline pieces:
#Candidate filtering (hard rules)
#Scoring / ranking
#Quote request lifecycle
#MatchingEngine (the “one object” entry point)

from .candidate_filter import CandidateResolver, SearchFilters
from .policy import MatchingPolicy, default_matching_policy, policy_from_env, proximity_first_policy
from .scoring import MatchScorer, ScoreBreakdown
from .ranking import MatchResult, RankingPipeline, SortOption
from .quote_manager import QuoteRequestManager
from .engine import MatchingEngine, NearbySummary

__all__ = [
    "CandidateResolver",
    "SearchFilters",
    "MatchingPolicy",
    "default_matching_policy",
    "policy_from_env",
    "proximity_first_policy",
    "MatchScorer",
    "ScoreBreakdown",
    "MatchResult",
    "RankingPipeline",
    "SortOption",
    "QuoteRequestManager",
    "MatchingEngine",
    "NearbySummary",
]
