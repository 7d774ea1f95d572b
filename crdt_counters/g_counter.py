"""Grow-only counter (G-Counter) CRDT.

A G-Counter maps each replica to the count that replica has
accumulated locally. The counter's value is the sum over replicas, and
merge takes the per-replica maximum. Because a replica's own count only
ever grows, the maximum of two snapshots is always a state that replica
actually reached, so merge can neither lose nor invent increments.

This is the building block for ``PNCounter``.

Example::

    a = GCounter()
    b = GCounter()

    a.inc("node-a", 5)
    b.inc("node-b", 3)

    a.merge(b)
    assert a.value() == 8
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Self

from crdt_counters.config import DEFAULT_CONFIG, CounterConfig
from crdt_counters.errors import CounterOverflowError, MalformedStateError

logger = logging.getLogger(__name__)


def _check_amount(amount: Any) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"amount must be an int, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")


class GCounter:
    """Grow-only counter CRDT.

    Not internally synchronized: callers serialize ``inc`` and ``merge``
    on one instance, and only the owning replica increments its own entry.

    Args:
        config: Integer width and overflow policy. Defaults to
            ``DEFAULT_CONFIG`` (64-bit, raise on overflow).
    """

    __slots__ = ("_counts", "_config")

    def __init__(self, *, config: CounterConfig | None = None):
        self._counts: dict[str, int] = {}
        self._config = config if config is not None else DEFAULT_CONFIG

    @classmethod
    def new(cls, *, config: CounterConfig | None = None) -> Self:
        """Return an empty counter."""
        return cls(config=config)

    @property
    def config(self) -> CounterConfig:
        return self._config

    @property
    def counts(self) -> dict[str, int]:
        """Copy of the replica -> count map."""
        return dict(self._counts)

    @property
    def replicas(self) -> list[str]:
        """Replica ids with an entry, sorted."""
        return sorted(self._counts)

    def replica_value(self, replica: str) -> int:
        """Get a single replica's count, or 0 if it has none."""
        return self._counts.get(replica, 0)

    def value(self) -> int:
        """Total count across all replicas.

        Raises:
            CounterOverflowError: If the sum exceeds ``config.max_count``.
        """
        total = sum(self._counts.values())
        if total > self._config.max_count:
            raise CounterOverflowError(
                f"GCounter total {total} exceeds {self._config.bits}-bit limit",
                limit=self._config.max_count,
            )
        return total

    def inc(self, replica: str, amount: int = 1) -> None:
        """Add ``amount`` to ``replica``'s entry, creating it if absent.

        Args:
            replica: The incrementing replica's id.
            amount: Non-negative amount to add.

        Raises:
            TypeError: If ``replica`` is not a str or ``amount`` is not an int.
            ValueError: If ``amount`` is negative.
            CounterOverflowError: If the entry would pass ``config.max_count``
                under the ``"raise"`` policy. The entry is left unchanged.
        """
        if not isinstance(replica, str):
            raise TypeError(f"replica id must be a str, got {type(replica).__name__}")
        _check_amount(amount)
        current = self._counts.get(replica, 0)
        updated = current + amount
        limit = self._config.max_count
        if updated > limit:
            if not self._config.saturating:
                raise CounterOverflowError(
                    f"increment of {amount} overflows replica {replica!r} "
                    f"({current} + {amount} > {limit})",
                    replica=replica,
                    limit=limit,
                )
            logger.warning("Replica %r saturated at %d (dropped %d)", replica, limit, updated - limit)
            updated = limit
        self._counts[replica] = updated

    def merge(self, other: GCounter) -> None:
        """Merge another G-Counter into this one (per-replica max).

        ``other`` is only read, and nothing from it is retained except
        the integer counts, so the caller may keep using it.

        Args:
            other: Another GCounter to merge from.

        Raises:
            TypeError: If ``other`` is not a GCounter.
            CounterOverflowError: If ``other`` holds a count above this
                counter's ``max_count`` under the ``"raise"`` policy. No
                entry is changed.
        """
        if not isinstance(other, GCounter):
            raise TypeError(f"cannot merge {type(other).__name__} into GCounter")
        if other is self:
            return

        self._apply(self._pending_updates(other), len(other._counts))

    def _pending_updates(self, other: GCounter) -> dict[str, int]:
        """Entries that ``merge(other)`` would raise, after the overflow check."""
        limit = self._config.max_count
        updates: dict[str, int] = {}
        for replica, incoming in other._counts.items():
            if incoming > limit:
                if not self._config.saturating:
                    raise CounterOverflowError(
                        f"incoming count {incoming} for replica {replica!r} exceeds "
                        f"{self._config.bits}-bit limit",
                        replica=replica,
                        limit=limit,
                    )
                logger.warning("Replica %r saturated at %d during merge", replica, limit)
                incoming = limit
            if incoming > self._counts.get(replica, 0):
                updates[replica] = incoming
        return updates

    def _apply(self, updates: dict[str, int], seen: int) -> None:
        self._counts.update(updates)
        if updates:
            logger.debug("Merged %d of %d replica entries", len(updates), seen)

    def copy(self) -> Self:
        """Return an independent counter with the same state and config."""
        counter = type(self)(config=self._config)
        counter._counts = dict(self._counts)
        return counter

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return {
            "type": "GCounter",
            "counts": dict(self._counts),
        }

    @classmethod
    def from_dict(cls, data: Mapping, *, config: CounterConfig | None = None) -> Self:
        """Deserialize from a plain dict.

        Args:
            data: Dict produced by ``to_dict()``.
            config: Config for the rebuilt counter.

        Raises:
            MalformedStateError: If ``data`` is not a valid GCounter state.
        """
        counter = cls(config=config)
        counter._counts = _parse_counts(data, "GCounter", "counts", counter._config)
        return counter

    def __repr__(self) -> str:
        total = sum(self._counts.values())
        return f"GCounter(value={total}, replicas={len(self._counts)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GCounter):
            return NotImplemented
        return self._counts == other._counts


def _parse_counts(data: Any, type_name: str, key: str, config: CounterConfig) -> dict[str, int]:
    """Validate one serialized replica map and return a fresh dict of it."""
    if not isinstance(data, Mapping):
        raise MalformedStateError(f"{type_name} state must be a mapping, got {type(data).__name__}")
    if data.get("type", type_name) != type_name:
        raise MalformedStateError(f"expected type {type_name!r}, got {data.get('type')!r}")
    raw = data.get(key)
    if not isinstance(raw, Mapping):
        raise MalformedStateError(f"{type_name} state is missing a {key!r} mapping")

    counts: dict[str, int] = {}
    for replica, count in raw.items():
        if not isinstance(replica, str):
            raise MalformedStateError(f"replica id must be a string, got {replica!r}")
        if isinstance(count, bool) or not isinstance(count, int):
            raise MalformedStateError(f"count for {replica!r} must be an int, got {count!r}")
        if not 0 <= count <= config.max_count:
            raise MalformedStateError(
                f"count for {replica!r} out of range for {config.bits}-bit counter: {count}"
            )
        counts[replica] = count
    return counts
