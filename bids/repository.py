"""
Purpose: Storage interface for bids.
What it does:
Defines BidRepository (what the quote manager needs from storage) and an
in-memory implementation.

The in-memory store keeps a unique index on (load_id, truck_id) for Pending
bids, the same job a partial unique index does in SQL:
    UNIQUE (load_id, truck_id) WHERE state = 'Pending'
A write that would create a second Pending bid for a pair raises
DuplicateRequestError instead of adding a row.

Every write is a single call that either applies fully or raises.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from core.errors import DuplicateRequestError
from .models import Bid, BidState

Pair = Tuple[str, str]


class BidRepository(Protocol):
    def add(self, bid: Bid) -> None:
        ...

    def update(self, bid: Bid) -> None:
        ...

    def get(self, bid_id: str) -> Optional[Bid]:
        ...

    def find_pending(self, load_id: str, truck_id: str) -> Optional[Bid]:
        ...

    def latest_for_pair(self, load_id: str, truck_id: str) -> Optional[Bid]:
        ...

    def list_for_load(self, load_id: str) -> List[Bid]:
        ...

    def list_pending(self) -> List[Bid]:
        ...


class InMemoryBidRepository:

    def __init__(self, bids: Iterable[Bid] = ()):
        self._lock = threading.RLock()
        self._bids: Dict[str, Bid] = {}
        self._pending_by_pair: Dict[Pair, str] = {}
        self._history_by_pair: Dict[Pair, List[str]] = {}
        for bid in bids:
            self.add(bid)

    # --- writes ---

    def add(self, bid: Bid) -> None:
        with self._lock:
            if bid.id in self._bids:
                raise ValueError(f"Bid {bid.id} already exists")
            if bid.is_pending:
                self._check_pending_slot(bid)
                self._pending_by_pair[bid.pair] = bid.id
            self._bids[bid.id] = bid
            self._history_by_pair.setdefault(bid.pair, []).append(bid.id)

    def update(self, bid: Bid) -> None:
        with self._lock:
            current = self._bids.get(bid.id)
            if current is None:
                raise KeyError(bid.id)
            if bid.pair != current.pair:
                raise ValueError(f"Bid {bid.id}: load/truck of a bid can't change")

            if bid.is_pending:
                self._check_pending_slot(bid)
                self._pending_by_pair[bid.pair] = bid.id
            elif self._pending_by_pair.get(bid.pair) == bid.id:
                del self._pending_by_pair[bid.pair]

            self._bids[bid.id] = bid

    def _check_pending_slot(self, bid: Bid) -> None:
        holder = self._pending_by_pair.get(bid.pair)
        if holder is not None and holder != bid.id:
            raise DuplicateRequestError(bid.load_id, bid.truck_id, existing_bid_id=holder)

    # --- reads ---

    def get(self, bid_id: str) -> Optional[Bid]:
        return self._bids.get(bid_id)

    def find_pending(self, load_id: str, truck_id: str) -> Optional[Bid]:
        with self._lock:
            bid_id = self._pending_by_pair.get((load_id, truck_id))
            return self._bids[bid_id] if bid_id else None

    def latest_for_pair(self, load_id: str, truck_id: str) -> Optional[Bid]:
        with self._lock:
            history = self._history_by_pair.get((load_id, truck_id))
            return self._bids[history[-1]] if history else None

    def list_for_load(self, load_id: str) -> List[Bid]:
        with self._lock:
            return [bid for bid in self._bids.values() if bid.load_id == load_id]

    def list_pending(self) -> List[Bid]:
        with self._lock:
            return [self._bids[bid_id] for bid_id in self._pending_by_pair.values()]

    def count_in_state(self, state: BidState) -> int:
        with self._lock:
            return sum(1 for bid in self._bids.values() if bid.state == state)
