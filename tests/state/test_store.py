"""Tests for AuctionStateStore save/load/delete operations.

Uses an in-memory SQLite database for isolation and speed.
"""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path

import pytest

from auction.domain.models import Auction
from auction.domain.types import AuctionStatus
from auction.payments.ledger import InMemoryLedger
from auction.state.schema import init_auction_state_table, open_database
from auction.state.store import AuctionStateStore
from auction.state_machine.machine import AuctionMachine


@pytest.fixture
def conn() -> sqlite3.Connection:
    """In-memory SQLite connection with the state table initialized."""
    connection = sqlite3.connect(":memory:", isolation_level=None)
    init_auction_state_table(connection)
    return connection


@pytest.fixture
def store(conn: sqlite3.Connection) -> AuctionStateStore:
    """AuctionStateStore backed by the in-memory connection."""
    return AuctionStateStore(conn)


class TestSaveAndLoad:
    def test_load_missing_returns_none(self, store: AuctionStateStore) -> None:
        assert store.load("nope") is None

    def test_round_trip_selling_machine(self, store: AuctionStateStore) -> None:
        machine = AuctionMachine(InMemoryLedger())
        machine.start_selling("alice", "Book", 10)
        machine.offer("bob", 20)
        store.save("a1", machine)

        loaded = store.load("a1")
        assert loaded is not None
        auction, history = loaded
        assert auction == machine.auction
        assert history == machine.history

    def test_restored_machine_continues_listing(self, store: AuctionStateStore) -> None:
        ledger = InMemoryLedger()
        machine = AuctionMachine(ledger)
        machine.start_selling("alice", "Book", 10)
        machine.offer("bob", 20)
        store.save("a1", machine)

        loaded = store.load("a1")
        assert loaded is not None
        restored = AuctionMachine.from_snapshot(ledger, *loaded)
        restored.accept_offer("alice")
        restored.pay("bob", 20)

        assert restored.auction == Auction()
        assert ledger.balance("alice") == 20
        assert len(restored.history) == 4

    def test_save_overwrites_and_preserves_created_at(
        self, store: AuctionStateStore, conn: sqlite3.Connection
    ) -> None:
        machine = AuctionMachine(InMemoryLedger())
        store.save("a1", machine)
        created_before = conn.execute(
            "SELECT created_at FROM auction_state WHERE auction_id = 'a1'"
        ).fetchone()[0]

        time.sleep(0.01)
        machine.start_selling("alice", "Book", 10)
        store.save("a1", machine)

        row = conn.execute(
            "SELECT status, created_at FROM auction_state WHERE auction_id = 'a1'"
        ).fetchone()
        assert row == ("selling", created_before)
        assert conn.execute("SELECT COUNT(*) FROM auction_state").fetchone()[0] == 1

    def test_save_rolls_back_with_enclosing_transaction(
        self, store: AuctionStateStore, conn: sqlite3.Connection
    ) -> None:
        conn.execute("BEGIN IMMEDIATE")
        store.save("a1", AuctionMachine(InMemoryLedger()))
        conn.execute("ROLLBACK")
        assert store.load("a1") is None

    def test_delete(self, store: AuctionStateStore) -> None:
        store.save("a1", AuctionMachine(InMemoryLedger()))
        store.delete("a1")
        assert store.load("a1") is None


class TestOpenDatabase:
    def test_creates_parent_dirs_and_tables(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "auction.db"
        conn = open_database(db_path)
        try:
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }
        finally:
            conn.close()
        assert db_path.exists()
        assert {"auction_state", "ledger_balances"} <= tables

    def test_status_column_matches_enum(self, store: AuctionStateStore, conn) -> None:
        store.save("a1", AuctionMachine(InMemoryLedger()))
        status = conn.execute("SELECT status FROM auction_state").fetchone()[0]
        assert AuctionStatus(status) == AuctionStatus.IDLE
