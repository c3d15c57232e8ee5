"""Funds-transfer capability and ledger implementations."""

from auction.payments.ledger import InMemoryLedger, SqliteLedger
from auction.payments.transfer import FundsTransfer

__all__ = [
    "FundsTransfer",
    "InMemoryLedger",
    "SqliteLedger",
]
