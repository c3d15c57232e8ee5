"""AuctionMachine: guarded operations, transition history, and settlement."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from auction.domain.errors import (
    AmountMismatchError,
    AuctionError,
    BidTooLowError,
    InvalidStateError,
    TransferFailedError,
    UnauthorizedError,
)
from auction.domain.models import Auction
from auction.domain.types import AuctionStatus, validate_amount, validate_participant
from auction.payments.transfer import FundsTransfer
from auction.state_machine.transitions import TRANSITIONS, AuctionOperation

logger = structlog.get_logger()

History = list[tuple[AuctionStatus, str, AuctionStatus]]


class AuctionMachine:
    """Finite state machine governing one listing at a time.

    Owns the current :class:`Auction` record, checks every operation against
    the transition map and the caller's role, and pays the seller when the
    winner settles.  Each operation runs under a single lock and either
    swaps in a new record or raises without touching state.

    Usage::

        machine = AuctionMachine(transfer=ledger)
        machine.start_selling("alice", "Book", 10)  # -> SELLING
        machine.offer("bob", 20)
        machine.accept_offer("alice")               # -> ACCEPTED
        machine.pay("bob", 20)                      # -> IDLE, alice receives 20
    """

    def __init__(self, transfer: FundsTransfer, auction: Auction | None = None) -> None:
        self._transfer = transfer
        self._auction: Auction = auction if auction is not None else Auction()
        self._history: History = []
        self._lock = threading.RLock()

    @classmethod
    def from_snapshot(
        cls,
        transfer: FundsTransfer,
        auction: Auction,
        history: History,
    ) -> AuctionMachine:
        """Reconstruct a machine from a persisted snapshot.

        Args:
            transfer: The funds-transfer primitive to settle with.
            auction: The auction record to restore.
            history: The transition history as ``(from, operation, to)``
                     tuples in chronological order.

        Returns:
            An ``AuctionMachine`` holding *auction* with *history* recorded.
        """
        instance = cls(transfer, auction=auction)
        instance._history = list(history)
        return instance

    @property
    def auction(self) -> Auction:
        """Return the current auction record."""
        return self._auction

    @property
    def status(self) -> AuctionStatus:
        """Return the current auction status."""
        return self._auction.status

    @property
    def history(self) -> History:
        """Return a copy of the transition history.

        Each entry is a ``(from_status, operation, to_status)`` tuple recorded
        in chronological order.
        """
        return list(self._history)

    def get_valid_operations(self) -> list[str]:
        """Return a sorted list of operations allowed from the current status."""
        status = self._auction.status
        return sorted(op for state, op in TRANSITIONS if state == status)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start_selling(self, caller: str, product: str, initial_price: int) -> Auction:
        """Open a listing with *caller* as seller and bidder-of-record.

        A zero *initial_price* is allowed.

        Raises:
            InvalidStateError: If the auction is not idle.
            pydantic.ValidationError: If *caller* is empty or
                *initial_price* is not a non-negative integer.
        """
        op = AuctionOperation.START_SELLING
        with self._lock, self._log_rejections(op, caller):
            current = self._auction
            self._require_status(current, op)
            caller = validate_participant(caller)
            price = validate_amount(initial_price)
            return self._commit(
                current,
                op,
                status=TRANSITIONS[(current.status, op)],
                product=product,
                seller=caller,
                highest_bid=price,
                highest_bidder=caller,
            )

    def offer(self, caller: str, price: int) -> Auction:
        """Raise the high bid to *price* on behalf of *caller*.

        The seller is not barred from bidding on their own listing.

        Raises:
            InvalidStateError: If the auction is not selling.
            BidTooLowError: If *price* does not strictly exceed the high bid.
        """
        op = AuctionOperation.OFFER
        with self._lock, self._log_rejections(op, caller):
            current = self._auction
            self._require_status(current, op)
            caller = validate_participant(caller)
            price = validate_amount(price)
            if price <= current.highest_bid:
                raise BidTooLowError(price, current.highest_bid)
            return self._commit(
                current,
                op,
                status=TRANSITIONS[(current.status, op)],
                highest_bid=price,
                highest_bidder=caller,
            )

    def accept_offer(self, caller: str) -> Auction:
        """Freeze the current high bid; only the seller may accept.

        Raises:
            InvalidStateError: If the auction is not selling.
            UnauthorizedError: If *caller* is not the seller.
        """
        op = AuctionOperation.ACCEPT_OFFER
        with self._lock, self._log_rejections(op, caller):
            current = self._auction
            self._require_status(current, op)
            self._require_role(caller, current.seller, op, "seller")
            return self._commit(current, op, status=TRANSITIONS[(current.status, op)])

    def pay(self, caller: str, attached_amount: int) -> Auction:
        """Settle the accepted offer and reset the auction.

        Transfers *attached_amount* to the seller, then resets every field.
        The transfer and the reset happen under the same lock; if the
        transfer fails the record is left exactly as it was.

        Raises:
            InvalidStateError: If no offer has been accepted.
            UnauthorizedError: If *caller* is not the highest bidder.
            AmountMismatchError: If *attached_amount* differs from the
                accepted highest bid.
            TransferFailedError: If the funds transfer fails.
        """
        op = AuctionOperation.PAY
        with self._lock, self._log_rejections(op, caller):
            current = self._auction
            self._require_status(current, op)
            self._require_role(caller, current.highest_bidder, op, "highest_bidder")
            amount = validate_amount(attached_amount)
            if amount != current.highest_bid:
                raise AmountMismatchError(amount, current.highest_bid)

            seller = current.seller
            if seller is None:
                raise InvalidStateError(current.status, op)
            self._send_funds(seller, amount)
            logger.info(
                "auction_settled",
                product=current.product,
                seller=seller,
                buyer=caller,
                amount=amount,
            )
            return self._commit(current, op, reset=True)

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    @staticmethod
    def _require_status(current: Auction, op: AuctionOperation) -> None:
        if (current.status, op) not in TRANSITIONS:
            raise InvalidStateError(current.status, op)

    @staticmethod
    def _require_role(
        caller: str,
        holder: str | None,
        op: AuctionOperation,
        role: str,
    ) -> None:
        if holder is None or caller != holder:
            raise UnauthorizedError(caller, op, role)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _send_funds(self, recipient: str, amount: int) -> None:
        """Invoke the transfer primitive exactly once, normalizing failures."""
        try:
            ok = self._transfer.transfer(recipient, amount)
        except TransferFailedError:
            raise
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            raise TransferFailedError(recipient, amount, reason=reason) from exc

        if not ok:
            raise TransferFailedError(recipient, amount)

    def _commit(
        self,
        current: Auction,
        op: AuctionOperation,
        reset: bool = False,
        **changes: object,
    ) -> Auction:
        """Build the next record, then swap it in and record the transition.

        The new record is fully validated before the swap, so a validation
        failure leaves the machine untouched.
        """
        if reset:
            new = Auction()
        else:
            new = Auction.model_validate({**current.model_dump(), **changes})
        self._auction = new
        self._history.append((current.status, op.value, new.status))
        logger.info(
            "auction_transition",
            operation=op.value,
            from_status=current.status.value,
            to_status=new.status.value,
            highest_bid=new.highest_bid,
            highest_bidder=new.highest_bidder,
        )
        return new

    @contextmanager
    def _log_rejections(self, op: AuctionOperation, caller: object) -> Iterator[None]:
        """Log a failed operation and re-raise the error unchanged."""
        try:
            yield
        except TransferFailedError as exc:
            logger.warning(
                "auction_settlement_failed",
                operation=op.value,
                caller=caller,
                recipient=exc.recipient,
                amount=exc.amount,
                reason=exc.reason,
            )
            raise
        except AuctionError as exc:
            logger.info(
                "auction_operation_rejected",
                operation=op.value,
                caller=caller,
                status=self._auction.status.value,
                error=type(exc).__name__,
            )
            raise
