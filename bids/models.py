"""
Purpose: Data model for quote requests (bids).
What it does:
Defines Bid and BidState. A Bid is the record a shipper's "Request Quote"
creates against one truck for one load.

BidState.NO_REQUEST is the implicit state of a (load, truck) pair that has no
bid yet. It is reported by read paths and never stored on a Bid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple
import uuid


class BidState(str, Enum):
    NO_REQUEST = "NoRequest"
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    EXPIRED = "Expired"
    WITHDRAWN = "Withdrawn"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset(
    {BidState.ACCEPTED, BidState.REJECTED, BidState.EXPIRED, BidState.WITHDRAWN}
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_bid_id() -> str:
    return f"BID-{uuid.uuid4().hex[:12].upper()}"


@dataclass(frozen=True)
class Bid:
    id: str
    load_id: str
    truck_id: str
    carrier_id: str
    requested_at: datetime = field(default_factory=_utcnow)
    state: BidState = BidState.PENDING
    updated_at: Optional[datetime] = None

    @property
    def pair(self) -> Tuple[str, str]:
        """(load_id, truck_id): the key the at-most-one-pending rule is about."""
        return (self.load_id, self.truck_id)

    @property
    def is_pending(self) -> bool:
        return self.state == BidState.PENDING
