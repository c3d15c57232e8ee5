"""Domain enumerations and scalar types for the auction."""

from enum import StrEnum
from typing import Annotated

from pydantic import Field, StringConstraints, TypeAdapter


class AuctionStatus(StrEnum):
    """States in the auction lifecycle."""

    IDLE = "idle"
    SELLING = "selling"
    ACCEPTED = "accepted"


# Identity of a participant as supplied by the host.  The empty identity is
# represented by ``None`` on the record, never by a sentinel string.
ParticipantId = Annotated[str, StringConstraints(min_length=1)]

# Unsigned integer amount.  Strict so that floats, bools and numeric strings
# are rejected instead of silently coerced.
Amount = Annotated[int, Field(ge=0, strict=True)]

_PARTICIPANT_ADAPTER: TypeAdapter[str] = TypeAdapter(ParticipantId)
_AMOUNT_ADAPTER: TypeAdapter[int] = TypeAdapter(Amount)


def validate_participant(value: object) -> str:
    """Validate a caller identity.

    Raises:
        pydantic.ValidationError: If *value* is not a non-empty string.
    """
    return _PARTICIPANT_ADAPTER.validate_python(value)


def validate_amount(value: object) -> int:
    """Validate a monetary amount.

    Raises:
        pydantic.ValidationError: If *value* is not a non-negative ``int``.
    """
    return _AMOUNT_ADAPTER.validate_python(value)
