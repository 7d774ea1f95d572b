"""Positive-Negative counter (PN-Counter) CRDT.

A PN-Counter supports both increment and decrement by combining two
G-Counters: one for increments (P) and one for decrement magnitudes (N).
A decrement is recorded as growth of N, never as subtraction, so both
halves keep the grow-only merge guarantees. The value is
``P.value() - N.value()``.

Example::

    c = PNCounter()
    c.inc("node-a", 10)
    c.dec("node-a", 3)
    assert c.value() == 7
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Self

from crdt_counters.config import DEFAULT_CONFIG, CounterConfig
from crdt_counters.errors import ConversionError, CounterOverflowError, MalformedStateError
from crdt_counters.g_counter import GCounter


class PNCounter:
    """Positive-Negative counter CRDT.

    Wraps two G-Counters: ``_p`` for increments and ``_n`` for
    decrements. Both halves share this counter's config.

    Args:
        config: Integer width and overflow policy.
    """

    __slots__ = ("_p", "_n", "_config")

    def __init__(self, *, config: CounterConfig | None = None):
        self._config = config if config is not None else DEFAULT_CONFIG
        self._p = GCounter(config=self._config)
        self._n = GCounter(config=self._config)

    @classmethod
    def new(cls, *, config: CounterConfig | None = None) -> Self:
        """Return a counter with two empty halves."""
        return cls(config=config)

    @property
    def config(self) -> CounterConfig:
        return self._config

    @property
    def positive(self) -> GCounter:
        """Copy of the increment half."""
        return self._p.copy()

    @property
    def negative(self) -> GCounter:
        """Copy of the decrement half."""
        return self._n.copy()

    @property
    def replicas(self) -> list[str]:
        """Replica ids present in either half, sorted."""
        return sorted(set(self._p.replicas) | set(self._n.replicas))

    def increments(self) -> int:
        """Total increments across all replicas."""
        return self._p.value()

    def decrements(self) -> int:
        """Total decrements across all replicas."""
        return self._n.value()

    def replica_value(self, replica: str) -> int:
        """Net contribution of one replica (its increments minus decrements)."""
        return self._p.replica_value(replica) - self._n.replica_value(replica)

    def value(self) -> int:
        """Net count (increments - decrements).

        Raises:
            ConversionError: If either total overflows the unsigned width,
                or the difference is outside ``[config.min_value,
                config.max_value]``.
        """
        try:
            total = self._p.value() - self._n.value()
        except CounterOverflowError as exc:
            raise ConversionError(f"PNCounter value cannot be computed: {exc}") from exc
        if not self._config.min_value <= total <= self._config.max_value:
            raise ConversionError(
                f"PNCounter value {total} does not fit a signed {self._config.bits}-bit integer"
            )
        return total

    def inc(self, replica: str, amount: int = 1) -> None:
        """Increment the counter on behalf of ``replica``.

        Args:
            replica: The incrementing replica's id.
            amount: Non-negative amount to add.
        """
        self._p.inc(replica, amount)

    def dec(self, replica: str, amount: int = 1) -> None:
        """Decrement the counter on behalf of ``replica``.

        Recorded as an increment of the decrement half.

        Args:
            replica: The decrementing replica's id.
            amount: Non-negative amount to subtract.
        """
        self._n.inc(replica, amount)

    def merge(self, other: PNCounter) -> None:
        """Merge another PN-Counter into this one.

        Merges the P and N halves independently. Both halves are checked
        before either is written, so an overflow rejects the whole merge.

        Args:
            other: Another PNCounter to merge from.

        Raises:
            TypeError: If ``other`` is not a PNCounter.
            CounterOverflowError: See ``GCounter.merge``.
        """
        if not isinstance(other, PNCounter):
            raise TypeError(f"cannot merge {type(other).__name__} into PNCounter")
        if other is self:
            return

        p_updates = self._p._pending_updates(other._p)
        n_updates = self._n._pending_updates(other._n)
        self._p._apply(p_updates, len(other._p._counts))
        self._n._apply(n_updates, len(other._n._counts))

    def copy(self) -> Self:
        """Return an independent counter with the same state and config."""
        counter = type(self)(config=self._config)
        counter._p = self._p.copy()
        counter._n = self._n.copy()
        return counter

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return {
            "type": "PNCounter",
            "p": self._p.to_dict(),
            "n": self._n.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping, *, config: CounterConfig | None = None) -> Self:
        """Deserialize from a plain dict.

        Args:
            data: Dict produced by ``to_dict()``.
            config: Config for the rebuilt counter.

        Raises:
            MalformedStateError: If ``data`` is not a valid PNCounter state.
        """
        if not isinstance(data, Mapping):
            raise MalformedStateError(f"PNCounter state must be a mapping, got {type(data).__name__}")
        if data.get("type", "PNCounter") != "PNCounter":
            raise MalformedStateError(f"expected type 'PNCounter', got {data.get('type')!r}")
        for half in ("p", "n"):
            if half not in data:
                raise MalformedStateError(f"PNCounter state is missing {half!r}")

        counter = cls(config=config)
        counter._p = GCounter.from_dict(data["p"], config=counter._config)
        counter._n = GCounter.from_dict(data["n"], config=counter._config)
        return counter

    def __repr__(self) -> str:
        net = sum(self._p._counts.values()) - sum(self._n._counts.values())
        return f"PNCounter(value={net}, replicas={len(self.replicas)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PNCounter):
            return NotImplemented
        return self._p == other._p and self._n == other._n
