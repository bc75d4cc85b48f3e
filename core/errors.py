"""
Purpose: Error taxonomy for the matching and quote-request engine.
What it does:
Gives callers three families to react to differently:

- input validation (fix the request, don't retry):
  InvalidFilterError, LoadNotFoundError, TruckNotFoundError, BidNotFoundError
- state conflicts (refresh state, maybe offer the action again later):
  DuplicateRequestError, InvalidStateError
- data access (the collaborator's retry policy applies, not ours):
  UpstreamUnavailableError

"No trucks nearby" is NOT an error. It is an empty list.
"""


class MatchingError(Exception):
    """Base class for everything the engine raises on purpose."""
    pass


# --- input validation ---

class InvalidFilterError(MatchingError, ValueError):
    """Raised when search filters or query inputs are out of range. Values are never clamped."""
    pass


class LoadNotFoundError(MatchingError, LookupError):
    def __init__(self, load_id: str):
        super().__init__(f"Load {load_id} not found")
        self.load_id = load_id


class TruckNotFoundError(MatchingError, LookupError):
    def __init__(self, truck_id: str):
        super().__init__(f"Truck {truck_id} not found")
        self.truck_id = truck_id


class BidNotFoundError(MatchingError, LookupError):
    def __init__(self, bid_id: str):
        super().__init__(f"Bid {bid_id} not found")
        self.bid_id = bid_id


# --- state conflicts ---

class DuplicateRequestError(MatchingError):
    """A Pending quote request already exists for this (load, truck) pair."""

    def __init__(self, load_id: str, truck_id: str, existing_bid_id: str | None = None):
        message = f"A quote request for truck {truck_id} on load {load_id} is already pending"
        if existing_bid_id:
            message += f" (bid {existing_bid_id})"
        super().__init__(message)
        self.load_id = load_id
        self.truck_id = truck_id
        self.existing_bid_id = existing_bid_id


class InvalidStateError(MatchingError):
    """Raised when a bid transition is attempted from a state that doesn't allow it."""
    pass


# --- data access ---

class UpstreamUnavailableError(MatchingError):
    """The data store or routing service behind a repository/provider failed."""
    pass
