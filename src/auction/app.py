"""Host wiring: logging configuration and machine construction.

Configures:
- **structlog** with JSON rendering (production) or console (development)
- **SQLite** snapshot store and ledger on a single connection
- **AuctionMachine** restored from the last saved snapshot
- **Transactions** wrapping load, operation, ledger credit and save
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TextIO

import structlog

from auction.config import Settings, get_settings
from auction.payments.ledger import SqliteLedger
from auction.state.schema import open_database
from auction.state.store import AuctionStateStore
from auction.state_machine.machine import AuctionMachine

logger = structlog.get_logger()


def configure_logging(production: bool = False, file: TextIO | None = None) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: console rendering at DEBUG level.

    Args:
        production: Enable production mode if ``True``.
        file: Stream log lines are written to (stdout if ``None``).
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=file),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service="auction")


def restore_machine(
    store: AuctionStateStore, ledger: SqliteLedger, auction_id: str
) -> AuctionMachine:
    """Rebuild the machine for *auction_id* from its saved snapshot.

    Returns an idle machine if nothing has been saved yet.
    """
    snapshot = store.load(auction_id)
    if snapshot is None:
        return AuctionMachine(ledger)
    auction, history = snapshot
    return AuctionMachine.from_snapshot(ledger, auction, history)


@dataclass
class Services:
    """Everything a host needs to drive one auction."""

    conn: sqlite3.Connection
    ledger: SqliteLedger
    store: AuctionStateStore
    machine: AuctionMachine
    auction_id: str

    @contextmanager
    def transaction(self) -> Iterator[AuctionMachine]:
        """Run one operation as a single SQLite write transaction.

        ``BEGIN IMMEDIATE`` takes the database write lock before the snapshot
        is reloaded, so hosts sharing the database file are serialized and
        never act on a stale record.  The ledger credit made by ``pay`` and
        the saved snapshot commit together; if the operation or the save
        raises, both roll back and the in-memory machine is reloaded from the
        database.

        Usage::

            with services.transaction() as machine:
                machine.pay("bob", 20)

        Yields:
            The machine restored from the latest committed snapshot.
        """
        self.conn.execute("BEGIN IMMEDIATE")
        try:
            self.machine = restore_machine(self.store, self.ledger, self.auction_id)
            yield self.machine
            self.store.save(self.auction_id, self.machine)
        except BaseException:
            self.conn.execute("ROLLBACK")
            self.machine = restore_machine(self.store, self.ledger, self.auction_id)
            raise
        self.conn.execute("COMMIT")

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()


def initialize_services(settings: Settings | None = None) -> Services:
    """Open the database and restore the configured auction.

    Args:
        settings: Host settings.  If ``None``, ``get_settings()`` is used.

    Returns:
        The wired :class:`Services`.
    """
    if settings is None:
        settings = get_settings()

    conn = open_database(settings.db_path)
    ledger = SqliteLedger(conn, attempts=settings.transfer_attempts)
    store = AuctionStateStore(conn)
    machine = restore_machine(store, ledger, settings.auction_id)
    logger.info(
        "auction_loaded",
        auction_id=settings.auction_id,
        status=machine.status.value,
        transitions=len(machine.history),
    )

    return Services(
        conn=conn,
        ledger=ledger,
        store=store,
        machine=machine,
        auction_id=settings.auction_id,
    )
