"""
Shared leaf package: the error taxonomy every other package raises.
"""
from .errors import (
    BidNotFoundError,
    DuplicateRequestError,
    InvalidFilterError,
    InvalidStateError,
    LoadNotFoundError,
    MatchingError,
    TruckNotFoundError,
    UpstreamUnavailableError,
)

__all__ = [
    "MatchingError",
    "InvalidFilterError",
    "LoadNotFoundError",
    "TruckNotFoundError",
    "BidNotFoundError",
    "DuplicateRequestError",
    "InvalidStateError",
    "UpstreamUnavailableError",
]
