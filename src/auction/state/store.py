"""SQLite-backed auction snapshot store.

Accepts a sqlite3.Connection and uses parameterized queries exclusively.
Writes are left to the connection's transaction control: durable at once on
an autocommit connection, or committed with the rest of a host transaction
(see ``Services.transaction``).  Only the current snapshot of each auction
is kept; settled listings are not archived.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime

from auction.domain.models import Auction
from auction.domain.types import AuctionStatus
from auction.state.serializers import (
    deserialize_auction,
    deserialize_history,
    serialize_auction,
    serialize_history,
)
from auction.state_machine.machine import AuctionMachine


class AuctionStateStore:
    """Persist and retrieve auction snapshots in SQLite."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize with an open database connection.

        Args:
            conn: An open sqlite3.Connection whose database already has the
                  ``auction_state`` table (see ``init_auction_state_table``).
        """
        self._conn = conn

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def save(self, auction_id: str, machine: AuctionMachine) -> None:
        """Persist the machine's current record and history.

        Uses ``INSERT OR REPLACE`` with a ``COALESCE`` subquery so the
        original ``created_at`` is preserved across updates.

        Args:
            auction_id: Unique auction identifier (primary key).
            machine: The machine whose state is saved.
        """
        now = datetime.now(tz=UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        auction = machine.auction

        self._conn.execute(
            """
            INSERT OR REPLACE INTO auction_state (
                auction_id, status, auction_json, history_json,
                created_at, updated_at
            ) VALUES (
                ?, ?, ?, ?,
                COALESCE(
                    (SELECT created_at FROM auction_state WHERE auction_id = ?),
                    ?
                ),
                ?
            )
            """,
            (
                auction_id,
                auction.status.value,
                serialize_auction(auction),
                serialize_history(machine.history),
                auction_id,  # for the COALESCE subquery
                now,         # default created_at on first insert
                now,         # updated_at always set to now
            ),
        )

    def delete(self, auction_id: str) -> None:
        """Delete an auction snapshot by ID."""
        self._conn.execute(
            "DELETE FROM auction_state WHERE auction_id = ?",
            (auction_id,),
        )

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def load(
        self, auction_id: str
    ) -> tuple[Auction, list[tuple[AuctionStatus, str, AuctionStatus]]] | None:
        """Load the saved record and history for *auction_id*.

        Returns:
            ``(auction, history)`` or ``None`` if nothing was saved.
        """
        row = self._conn.execute(
            "SELECT auction_json, history_json FROM auction_state WHERE auction_id = ?",
            (auction_id,),
        ).fetchone()
        if row is None:
            return None
        auction_json, history_json = row
        return deserialize_auction(auction_json), deserialize_history(history_json)

