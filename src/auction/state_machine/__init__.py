"""Auction state machine with transition validation and settlement."""

from auction.state_machine.machine import AuctionMachine
from auction.state_machine.transitions import TRANSITIONS, AuctionOperation

__all__ = [
    "AuctionMachine",
    "AuctionOperation",
    "TRANSITIONS",
]
