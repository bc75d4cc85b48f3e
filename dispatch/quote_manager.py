"""
Purpose: Quote request lifecycle per (load, truck) pair.
What it does:
Issues and withdraws quote requests, enforcing "at most one Pending bid per
pair" even with two browser tabs or a reconnect replay firing the same request.

Race Condition Resolver: the read-check-create sequence in `request_quote`
runs under a keyed lock on (load_id, truck_id). The bid repository's unique
pending index is the last line: if it still sees a duplicate it raises
DuplicateRequestError and nothing is written.

Disabling the button in the UI is only a latency nicety; correctness lives here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from bids.locks import KeyedLockManager
from bids.models import Bid, BidState, new_bid_id
from bids.repository import BidRepository
from core.errors import (
    BidNotFoundError,
    DuplicateRequestError,
    InvalidStateError,
    LoadNotFoundError,
    TruckNotFoundError,
)
from loads.repository import LoadRepository
from trucks.repository import TruckRepository

from .policy import MatchingPolicy, default_matching_policy
from .state_machines.bid_state import (
    can_request_quote,
    transition_bid_to_accepted,
    transition_bid_to_expired,
    transition_bid_to_rejected,
    transition_bid_to_withdrawn,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuoteRequestManager:

    def __init__(
        self,
        trucks: TruckRepository,
        loads: LoadRepository,
        bids: BidRepository,
        *,
        policy: Optional[MatchingPolicy] = None,
        lock_manager: Optional[KeyedLockManager] = None,
        clock: Clock = utcnow,
        id_factory: Callable[[], str] = new_bid_id,
    ):
        self.trucks = trucks
        self.loads = loads
        self.bids = bids
        self.policy = policy or default_matching_policy()
        self.lock_manager = lock_manager or KeyedLockManager()
        self.clock = clock
        self.id_factory = id_factory

    @staticmethod
    def _pair_key(load_id: str, truck_id: str) -> str:
        return f"quote:{load_id}:{truck_id}"

    # --- shipper actions ---

    def request_quote(self, truck_id: str, load_id: str) -> str:
        """
        Creates a Pending bid for (load_id, truck_id) and returns its id.

        Raises:
            LoadNotFoundError / TruckNotFoundError: unknown ids
            DuplicateRequestError: a request for this pair is already Pending
            InvalidStateError: the pair's last bid was Accepted
            UpstreamUnavailableError: storage failed (nothing was written)
        """
        load = self.loads.get(load_id)
        if load is None:
            raise LoadNotFoundError(load_id)
        truck = self.trucks.get(truck_id)
        if truck is None:
            raise TruckNotFoundError(truck_id)

        with self.lock_manager.lock(self._pair_key(load_id, truck_id)):
            pending = self.bids.find_pending(load_id, truck_id)
            if pending is not None:
                logger.warning(
                    "Duplicate quote request for truck %s on load %s (pending bid %s)",
                    truck_id, load_id, pending.id,
                )
                raise DuplicateRequestError(load_id, truck_id, existing_bid_id=pending.id)

            latest = self.bids.latest_for_pair(load_id, truck_id)
            current_state = latest.state if latest else BidState.NO_REQUEST
            if not can_request_quote(current_state):
                raise InvalidStateError(
                    f"Truck {truck_id} already has a {current_state.value} bid on load {load_id}"
                )

            bid = Bid(
                id=self.id_factory(),
                load_id=load_id,
                truck_id=truck_id,
                carrier_id=truck.carrier_id,
                requested_at=self.clock(),
                state=BidState.PENDING,
            )
            self.bids.add(bid)

        logger.info("Quote requested: bid %s truck %s load %s", bid.id, truck_id, load_id)
        return bid.id

    def withdraw_quote(self, bid_id: str) -> None:
        """
        Pending -> Withdrawn.

        Raises:
            BidNotFoundError: unknown bid
            InvalidStateError: bid is not Pending
        """
        self._apply(bid_id, transition_bid_to_withdrawn)
        logger.info("Quote withdrawn: bid %s", bid_id)

    # --- counterparty / expiry hooks ---

    def accept_quote(self, bid_id: str) -> Bid:
        """Carrier-side workflow: Pending -> Accepted."""
        return self._apply(bid_id, transition_bid_to_accepted)

    def reject_quote(self, bid_id: str) -> Bid:
        """Carrier-side workflow: Pending -> Rejected."""
        return self._apply(bid_id, transition_bid_to_rejected)

    def expire_quote(self, bid_id: str) -> Bid:
        return self._apply(bid_id, transition_bid_to_expired)

    def expire_stale_quotes(self, now: Optional[datetime] = None) -> List[Bid]:
        """
        Sweep: every Pending bid requested more than `quote_ttl_seconds` ago
        becomes Expired. Returns the expired bids.

        Meant to be called periodically by whatever scheduler the app runs.
        """
        now = now or self.clock()
        cutoff = now - timedelta(seconds=self.policy.quote_ttl_seconds)

        expired: List[Bid] = []
        for bid in self.bids.list_pending():
            if bid.requested_at > cutoff:
                continue
            try:
                expired.append(self._apply(bid.id, transition_bid_to_expired, now))
            except InvalidStateError:
                # resolved (withdrawn/answered) between the listing and the lock
                continue

        if expired:
            logger.info("Expired %d stale quote requests", len(expired))
        return expired

    def _apply(
        self,
        bid_id: str,
        transition: Callable[[Bid, Optional[datetime]], Bid],
        now: Optional[datetime] = None,
    ) -> Bid:
        bid = self.bids.get(bid_id)
        if bid is None:
            raise BidNotFoundError(bid_id)

        with self.lock_manager.lock(self._pair_key(bid.load_id, bid.truck_id)):
            # re-read under the lock; someone may have moved it
            bid = self.bids.get(bid_id)
            if bid is None:
                raise BidNotFoundError(bid_id)
            updated = transition(bid, now or self.clock())
            self.bids.update(updated)
        return updated

    # --- reads ---

    def get_active_bids_for_load(self, load_id: str) -> List[Bid]:
        """
        Pending bids on a load, oldest first.
        """
        active = [bid for bid in self.bids.list_for_load(load_id) if bid.is_pending]
        active.sort(key=lambda b: (b.requested_at, b.id))
        return active

    def get_quote_state(self, load_id: str, truck_id: str) -> BidState:
        """
        State of the pair's latest bid, or NO_REQUEST. The UI disables
        "Request Quote" only while this is PENDING.
        """
        latest = self.bids.latest_for_pair(load_id, truck_id)
        return latest.state if latest else BidState.NO_REQUEST
