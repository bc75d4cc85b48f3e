"""
Bids domain package.

Public API:
- Domain models: Bid, BidState, TERMINAL_STATES
- Storage: BidRepository, InMemoryBidRepository
- Concurrency: KeyedLockManager
"""
from .models import TERMINAL_STATES, Bid, BidState, new_bid_id
from .repository import BidRepository, InMemoryBidRepository
from .locks import KeyedLockManager

__all__ = [
    "Bid",
    "BidState",
    "TERMINAL_STATES",
    "new_bid_id",
    "BidRepository",
    "InMemoryBidRepository",
    "KeyedLockManager",
]
