"""Retry infrastructure for transfer primitives."""

from auction.resilience.retry import resilient_call

__all__ = [
    "resilient_call",
]
