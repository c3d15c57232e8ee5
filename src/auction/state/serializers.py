"""Serialization helpers for the auction record and transition history."""

from __future__ import annotations

import json

from auction.domain.models import Auction
from auction.domain.types import AuctionStatus


def serialize_auction(auction: Auction) -> str:
    """JSON-encode an auction record."""
    return auction.model_dump_json()


def deserialize_auction(json_str: str) -> Auction:
    """Decode and validate an auction record produced by ``serialize_auction``.

    Raises:
        pydantic.ValidationError: If the stored record violates the model.
    """
    return Auction.model_validate_json(json_str)


def serialize_history(history: list[tuple[AuctionStatus, str, AuctionStatus]]) -> str:
    """JSON-encode history as a list of ``[from, operation, to]`` triples."""
    return json.dumps([[from_s.value, op, to_s.value] for from_s, op, to_s in history])


def deserialize_history(json_str: str) -> list[tuple[AuctionStatus, str, AuctionStatus]]:
    """Decode history triples back to ``(AuctionStatus, str, AuctionStatus)`` tuples."""
    return [
        (AuctionStatus(from_s), op, AuctionStatus(to_s))
        for from_s, op, to_s in json.loads(json_str)
    ]
