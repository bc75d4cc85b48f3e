"""
Quote request (bid) lifecycle.

    NoRequest -> Pending -> Accepted | Rejected | Expired | Withdrawn

- NoRequest is implicit: a (load, truck) pair with no bid row.
- A new request is allowed from NoRequest or after the last one concluded
  negatively (Rejected, Expired, Withdrawn); never while one is Pending.
  Accepted is final for the pair.
- Only Pending bids move, and only to a terminal state.

Withdrawn is the shipper's move. Accepted/Rejected belong to the carrier-side
workflow and Expired to the expiry sweep; the transitions live here so every
caller goes through the same rules.

Transitions return a new Bid (Bid is frozen); persisting it is the caller's job.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional

from bids.models import TERMINAL_STATES, Bid, BidState
from core.errors import InvalidStateError

ALLOWED_TRANSITIONS: Dict[BidState, FrozenSet[BidState]] = {
    BidState.NO_REQUEST: frozenset({BidState.PENDING}),
    BidState.PENDING: frozenset(TERMINAL_STATES),
    BidState.ACCEPTED: frozenset(),
    BidState.REJECTED: frozenset({BidState.PENDING}),
    BidState.EXPIRED: frozenset({BidState.PENDING}),
    BidState.WITHDRAWN: frozenset({BidState.PENDING}),
}


def can_transition(current: BidState, target: BidState) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def can_request_quote(current: BidState) -> bool:
    """
    True when a new quote request may be issued for a pair whose latest
    bid is in `current` (NoRequest when there is none).
    """
    return can_transition(current, BidState.PENDING)


def _transition(bid: Bid, target: BidState, now: Optional[datetime]) -> Bid:
    if bid.state != BidState.PENDING or not can_transition(bid.state, target):
        raise InvalidStateError(f"Cannot move bid {bid.id} from {bid.state.value} to {target.value}")
    return replace(bid, state=target, updated_at=now or datetime.now(timezone.utc))


def transition_bid_to_withdrawn(bid: Bid, now: Optional[datetime] = None) -> Bid:
    """
    Shipper takes back an outstanding request.
    """
    return _transition(bid, BidState.WITHDRAWN, now)


def transition_bid_to_accepted(bid: Bid, now: Optional[datetime] = None) -> Bid:
    return _transition(bid, BidState.ACCEPTED, now)


def transition_bid_to_rejected(bid: Bid, now: Optional[datetime] = None) -> Bid:
    return _transition(bid, BidState.REJECTED, now)


def transition_bid_to_expired(bid: Bid, now: Optional[datetime] = None) -> Bid:
    """
    Called by the expiry sweep when a request outlives the quote TTL.
    """
    return _transition(bid, BidState.EXPIRED, now)
