"""Auction snapshot persistence package.

Provides SQLite-backed storage for auction snapshots and serialization
helpers for the auction record and its history.
"""

from auction.state.schema import init_auction_state_table, init_ledger_table, open_database
from auction.state.serializers import (
    deserialize_auction,
    deserialize_history,
    serialize_auction,
    serialize_history,
)
from auction.state.store import AuctionStateStore

__all__ = [
    "AuctionStateStore",
    "deserialize_auction",
    "deserialize_history",
    "init_auction_state_table",
    "init_ledger_table",
    "open_database",
    "serialize_auction",
    "serialize_history",
]
