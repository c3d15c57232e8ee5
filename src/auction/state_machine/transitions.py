"""Transition map defining all valid (status, operation) -> status mappings."""

from enum import StrEnum

from auction.domain.types import AuctionStatus


class AuctionOperation(StrEnum):
    """Operations that can be applied to the auction."""

    START_SELLING = "start_selling"
    OFFER = "offer"
    ACCEPT_OFFER = "accept_offer"
    PAY = "pay"


# All valid (current_status, operation) -> next_status mappings.
# Any pair not in this dict is rejected with InvalidStateError.
TRANSITIONS: dict[tuple[AuctionStatus, str], AuctionStatus] = {
    (AuctionStatus.IDLE, AuctionOperation.START_SELLING): AuctionStatus.SELLING,
    (AuctionStatus.SELLING, AuctionOperation.OFFER): AuctionStatus.SELLING,
    (AuctionStatus.SELLING, AuctionOperation.ACCEPT_OFFER): AuctionStatus.ACCEPTED,
    (AuctionStatus.ACCEPTED, AuctionOperation.PAY): AuctionStatus.IDLE,
}
