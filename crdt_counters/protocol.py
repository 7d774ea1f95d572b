"""Protocol shared by the counter CRDTs.

A state-based CRDT must have a merge that is:

- **Commutative**: ``merge(a, b) == merge(b, a)``
- **Associative**: ``merge(a, merge(b, c)) == merge(merge(a, b), c)``
- **Idempotent**: ``merge(a, a) == a``

so replicas converge no matter how often or in what order states are
exchanged.
"""

from __future__ import annotations

from typing import Any, Protocol, Self, runtime_checkable


@runtime_checkable
class CRDT(Protocol):
    """Structural contract for counters.

    - ``value()``: Read the current resolved value.
    - ``merge(other)``: Fold another replica's state in (in-place).
    - ``to_dict()`` / ``from_dict()``: Plain-dict state for an external
      transport to encode.
    """

    def value(self) -> Any:
        """The current resolved value."""
        ...

    def merge(self, other: Self) -> None:
        """Merge another replica's state into this one (in-place).

        Args:
            other: Another instance of the same CRDT type.
        """
        ...

    def to_dict(self) -> dict:
        """Serialize full state to a plain dict."""
        ...

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Rebuild an instance from ``to_dict()`` output."""
        ...
