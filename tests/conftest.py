"""Shared pytest fixtures for the auction test suite."""

import pytest

from auction.domain.models import Auction
from auction.domain.types import AuctionStatus
from auction.payments.ledger import InMemoryLedger
from auction.state_machine.machine import AuctionMachine
from participants import BIDDER, SELLER


@pytest.fixture
def ledger() -> InMemoryLedger:
    """An empty in-memory ledger that accepts every transfer."""
    return InMemoryLedger()


@pytest.fixture
def machine(ledger: InMemoryLedger) -> AuctionMachine:
    """An idle machine settling through the in-memory ledger."""
    return AuctionMachine(ledger)


@pytest.fixture
def selling_auction() -> Auction:
    """A listing of a book at 10 with one offer of 20 from BIDDER."""
    return Auction(
        status=AuctionStatus.SELLING,
        product="Book",
        seller=SELLER,
        highest_bid=20,
        highest_bidder=BIDDER,
    )


@pytest.fixture
def accepted_auction(selling_auction: Auction) -> Auction:
    """The selling auction after the seller accepted BIDDER's offer of 20."""
    return selling_auction.model_copy(update={"status": AuctionStatus.ACCEPTED})
