"""Concrete funds-transfer primitives.

``InMemoryLedger`` keeps balances in a dict and is meant for tests and
embedding.  ``SqliteLedger`` keeps balances in the ``ledger_balances`` table
and retries locked-database errors before giving up.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable

import structlog

from auction.domain.types import validate_amount, validate_participant
from auction.resilience.retry import resilient_call

logger = structlog.get_logger()


class InMemoryLedger:
    """Dict-backed ledger that credits recipients.

    Accounts listed in *rejecting* refuse incoming funds, which makes the
    transfer report failure.

    Args:
        rejecting: Account identities that refuse every transfer.
    """

    def __init__(self, rejecting: Iterable[str] = ()) -> None:
        self._balances: dict[str, int] = {}
        self._rejecting: set[str] = set(rejecting)
        self.transfers: list[tuple[str, int]] = []

    def reject(self, account: str) -> None:
        """Make *account* refuse future transfers."""
        self._rejecting.add(account)

    def accept(self, account: str) -> None:
        """Let *account* receive transfers again."""
        self._rejecting.discard(account)

    def balance(self, account: str) -> int:
        """Return the balance held by *account* (zero if unknown)."""
        return self._balances.get(account, 0)

    def transfer(self, to: str, amount: int) -> bool:
        """Credit *amount* to *to*; return False if the account refuses."""
        if to in self._rejecting:
            logger.info("ledger_transfer_rejected", to=to, amount=amount)
            return False
        self._balances[to] = self._balances.get(to, 0) + amount
        self.transfers.append((to, amount))
        return True


class SqliteLedger:
    """SQLite-backed ledger persisting balances across processes.

    Mirrors the store pattern: accepts an open ``sqlite3.Connection`` whose
    database already has the ``ledger_balances`` table (see
    ``init_ledger_table``) and uses parameterized queries.  Credits are not
    committed here: on an autocommit connection (``open_database``) a lone
    credit is durable at once, and inside a host transaction it commits or
    rolls back together with the auction snapshot.

    Args:
        conn: An open sqlite3.Connection.
        attempts: Attempts allowed when the database is locked.
        rejecting: Account identities that refuse every transfer.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        attempts: int = 3,
        rejecting: Iterable[str] = (),
    ) -> None:
        self._conn = conn
        self._rejecting: set[str] = set(rejecting)

        def credit(to: str, amount: int) -> None:
            self._conn.execute(
                """
                INSERT INTO ledger_balances (account, balance) VALUES (?, ?)
                ON CONFLICT (account) DO UPDATE SET balance = balance + excluded.balance
                """,
                (to, amount),
            )

        self._credit = resilient_call(
            "ledger_credit",
            retry_on=(sqlite3.OperationalError,),
            attempts=attempts,
        )(credit)

    def balance(self, account: str) -> int:
        """Return the balance held by *account* (zero if unknown)."""
        row = self._conn.execute(
            "SELECT balance FROM ledger_balances WHERE account = ?",
            (account,),
        ).fetchone()
        return int(row[0]) if row else 0

    def transfer(self, to: str, amount: int) -> bool:
        """Credit *amount* to *to*; return False if the account refuses.

        Raises:
            sqlite3.OperationalError: If the database stays locked after
                every retry attempt.
        """
        to = validate_participant(to)
        amount = validate_amount(amount)
        if to in self._rejecting:
            logger.info("ledger_transfer_rejected", to=to, amount=amount)
            return False
        self._credit(to, amount)
        logger.debug("ledger_transfer_applied", to=to, amount=amount)
        return True
