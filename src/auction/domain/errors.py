"""Domain-specific exception classes for the auction."""

from auction.domain.types import AuctionStatus


class AuctionError(Exception):
    """Base class for all domain errors raised by the auction."""


class InvalidStateError(AuctionError):
    """Raised when an operation is not valid in the current state.

    Attributes:
        current_status: The status the auction was in when the call was made.
        operation: The operation that was rejected.
    """

    def __init__(self, current_status: AuctionStatus, operation: str) -> None:
        self.current_status = current_status
        self.operation = operation
        super().__init__(
            f"Cannot apply operation '{operation}' in state '{current_status}'"
        )


class UnauthorizedError(AuctionError):
    """Raised when the caller does not hold the role an operation requires.

    Attributes:
        caller: The identity that attempted the operation.
        operation: The operation that was rejected.
        required_role: The role the caller needed (``seller`` or
            ``highest_bidder``).
    """

    def __init__(self, caller: str, operation: str, required_role: str) -> None:
        self.caller = caller
        self.operation = operation
        self.required_role = required_role
        super().__init__(
            f"'{caller}' is not the {required_role} and cannot apply '{operation}'"
        )


class BidTooLowError(AuctionError):
    """Raised when an offer does not strictly exceed the current high bid.

    Attributes:
        price: The offered price.
        highest_bid: The high bid the offer had to beat.
    """

    def __init__(self, price: int, highest_bid: int) -> None:
        self.price = price
        self.highest_bid = highest_bid
        super().__init__(f"Offer {price} does not exceed the highest bid {highest_bid}")


class AmountMismatchError(AuctionError):
    """Raised when a payment differs from the accepted price.

    Attributes:
        amount: The amount attached to the payment.
        expected: The accepted highest bid.
    """

    def __init__(self, amount: int, expected: int) -> None:
        self.amount = amount
        self.expected = expected
        super().__init__(f"Payment of {amount} does not match the agreed price {expected}")


class TransferFailedError(AuctionError):
    """Raised when the funds-transfer primitive fails during settlement.

    Attributes:
        recipient: The account the funds were destined for.
        amount: The amount that was not transferred.
        reason: Human-readable failure description.
    """

    def __init__(self, recipient: str, amount: int, reason: str = "transfer rejected") -> None:
        self.recipient = recipient
        self.amount = amount
        self.reason = reason
        super().__init__(f"Transfer of {amount} to '{recipient}' failed: {reason}")
