"""Exceptions raised by the counter CRDTs.

Every operation validates before it mutates, so when one of these is
raised the counter is left exactly as it was.
"""

from __future__ import annotations

__all__ = [
    "ConversionError",
    "CounterError",
    "CounterOverflowError",
    "MalformedStateError",
]


class CounterError(Exception):
    """Base class for all counter errors."""


class CounterOverflowError(CounterError, OverflowError):
    """A count or aggregate would exceed the configured unsigned width.

    Attributes:
        replica: Replica whose entry overflowed, or None for an aggregate.
        limit: The ceiling that was exceeded.
    """

    def __init__(self, message: str, *, replica: str | None = None, limit: int | None = None):
        super().__init__(message)
        self.replica = replica
        self.limit = limit


class ConversionError(CounterError, OverflowError):
    """A PNCounter value cannot be represented in the signed result range."""


class MalformedStateError(CounterError, ValueError):
    """Serialized counter state is not a valid counter representation."""
