"""SQLite schema for auction snapshots and ledger balances."""

from __future__ import annotations

import sqlite3
from pathlib import Path


def init_auction_state_table(conn: sqlite3.Connection) -> None:
    """Create the auction_state table if it does not already exist.

    One row per auction instance holding the current record and the
    transition history of the machine that produced it.

    Args:
        conn: An open sqlite3.Connection (WAL mode recommended).
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS auction_state (
            auction_id TEXT PRIMARY KEY,
            status TEXT NOT NULL,
            auction_json TEXT NOT NULL,
            history_json TEXT NOT NULL DEFAULT '[]',
            created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
        )
    """)

    conn.commit()


def init_ledger_table(conn: sqlite3.Connection) -> None:
    """Create the ledger_balances table if it does not already exist.

    Args:
        conn: An open sqlite3.Connection.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS ledger_balances (
            account TEXT PRIMARY KEY,
            balance INTEGER NOT NULL DEFAULT 0 CHECK (balance >= 0)
        )
    """)

    conn.commit()


def open_database(db_path: Path) -> sqlite3.Connection:
    """Open the auction database with WAL mode and every table initialized.

    The connection is in autocommit mode (``isolation_level=None``) so that
    transactions are opened explicitly by the host with ``BEGIN IMMEDIATE``.

    Args:
        db_path: Path to the SQLite database file.  Parent directories are
                 created if missing.

    Returns:
        An open sqlite3.Connection.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), isolation_level=None)
    conn.execute("PRAGMA journal_mode=WAL")
    init_auction_state_table(conn)
    init_ledger_table(conn)
    return conn
