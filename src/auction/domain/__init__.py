"""Domain types, the auction record, and errors."""

from auction.domain.errors import (
    AmountMismatchError,
    AuctionError,
    BidTooLowError,
    InvalidStateError,
    TransferFailedError,
    UnauthorizedError,
)
from auction.domain.models import Auction
from auction.domain.types import (
    Amount,
    AuctionStatus,
    ParticipantId,
    validate_amount,
    validate_participant,
)

__all__ = [
    "Amount",
    "AmountMismatchError",
    "Auction",
    "AuctionError",
    "AuctionStatus",
    "BidTooLowError",
    "InvalidStateError",
    "ParticipantId",
    "TransferFailedError",
    "UnauthorizedError",
    "validate_amount",
    "validate_participant",
]
