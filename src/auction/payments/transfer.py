"""The funds-transfer capability consumed by the auction during settlement."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FundsTransfer(Protocol):
    """Moves *amount* to the account identified by *to*.

    Implementations return ``True`` when the funds have moved and ``False``
    when the recipient rejected them.  They may also raise; the machine
    treats any exception as a failed transfer.
    """

    def transfer(self, to: str, amount: int) -> bool: ...
