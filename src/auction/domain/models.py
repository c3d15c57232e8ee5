"""Pydantic v2 model for the auction record."""

from pydantic import BaseModel, ConfigDict, model_validator

from auction.domain.types import Amount, AuctionStatus, ParticipantId


class Auction(BaseModel):
    """The single active auction.

    Immutable: every successful operation produces a new record.  ``Auction()``
    is the Idle record with every field in its reset state.
    """

    model_config = ConfigDict(frozen=True)

    status: AuctionStatus = AuctionStatus.IDLE
    product: str | None = None
    seller: ParticipantId | None = None
    highest_bid: Amount = 0
    highest_bidder: ParticipantId | None = None

    @model_validator(mode="after")
    def fields_must_match_status(self) -> "Auction":
        """Idle records are fully reset; active records name a seller and bidder."""
        if self.status == AuctionStatus.IDLE:
            if (
                self.product is not None
                or self.seller is not None
                or self.highest_bidder is not None
                or self.highest_bid != 0
            ):
                raise ValueError("an idle auction must have every listing field reset")
            return self

        missing = [
            name
            for name in ("product", "seller", "highest_bidder")
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(
                f"a {self.status} auction requires {', '.join(missing)}"
            )
        return self
