from .bid_state import (
    ALLOWED_TRANSITIONS,
    can_request_quote,
    can_transition,
    transition_bid_to_accepted,
    transition_bid_to_expired,
    transition_bid_to_rejected,
    transition_bid_to_withdrawn,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "can_request_quote",
    "can_transition",
    "transition_bid_to_accepted",
    "transition_bid_to_expired",
    "transition_bid_to_rejected",
    "transition_bid_to_withdrawn",
]
