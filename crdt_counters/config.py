"""Numeric configuration for counters.

Python integers never wrap, so the fixed-width behaviour of a replicated
counter is modelled explicitly: ``bits`` sets the unsigned ceiling for
per-replica counts and aggregates, and the signed range of
``PNCounter.value()``.

Environment variables:
    CRDT_COUNT_BITS: Integer width (default 64).
    CRDT_OVERFLOW: ``raise`` (default) or ``saturate``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

__all__ = ["DEFAULT_CONFIG", "CounterConfig", "OverflowPolicy"]

OverflowPolicy = Literal["raise", "saturate"]

DEFAULT_BITS = 64
MIN_BITS = 8
MAX_BITS = 1024

_POLICIES = ("raise", "saturate")


@dataclass(frozen=True)
class CounterConfig:
    """Width and overflow handling shared by a counter and its halves.

    Attributes:
        bits: Width of the unsigned count and the signed projection.
        overflow: ``"raise"`` rejects an increment or merge that would
            exceed ``max_count``; ``"saturate"`` clamps to ``max_count``.
    """

    bits: int = DEFAULT_BITS
    overflow: OverflowPolicy = "raise"

    def __post_init__(self) -> None:
        if isinstance(self.bits, bool) or not isinstance(self.bits, int):
            raise ValueError(f"bits must be an int, got {self.bits!r}")
        if not MIN_BITS <= self.bits <= MAX_BITS:
            raise ValueError(f"bits must be between {MIN_BITS} and {MAX_BITS}, got {self.bits}")
        if self.overflow not in _POLICIES:
            raise ValueError(f"overflow must be one of {_POLICIES}, got {self.overflow!r}")

    @property
    def max_count(self) -> int:
        """Largest representable per-replica count or aggregate."""
        return (1 << self.bits) - 1

    @property
    def max_value(self) -> int:
        """Largest signed value a PNCounter may report."""
        return (1 << (self.bits - 1)) - 1

    @property
    def min_value(self) -> int:
        """Smallest signed value a PNCounter may report."""
        return -(1 << (self.bits - 1))

    @property
    def saturating(self) -> bool:
        return self.overflow == "saturate"

    @classmethod
    def from_env(cls) -> CounterConfig:
        """Build a config from ``CRDT_COUNT_BITS`` and ``CRDT_OVERFLOW``.

        Unset variables fall back to the defaults.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        raw_bits = os.environ.get("CRDT_COUNT_BITS", "").strip()
        raw_policy = os.environ.get("CRDT_OVERFLOW", "").strip().lower()

        try:
            bits = int(raw_bits) if raw_bits else DEFAULT_BITS
        except ValueError:
            raise ValueError(f"CRDT_COUNT_BITS must be an integer, got {raw_bits!r}") from None

        return cls(bits=bits, overflow=raw_policy or "raise")


DEFAULT_CONFIG = CounterConfig()
