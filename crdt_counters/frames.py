"""pandas views of counter state.

Useful for inspecting what each replica has contributed and for
checking whether several holders of the same logical counter have
converged after an exchange.

Example::

    views = {"node-a": counter_a, "node-b": counter_b}
    print(replica_table(views))
    assert converged(views)
"""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from crdt_counters.g_counter import GCounter
from crdt_counters.pn_counter import PNCounter

__all__ = ["converged", "counter_frame", "replica_table"]

Counter = GCounter | PNCounter

REPLICA = "replica"
COUNT = "count"
INCREMENTS = "increments"
DECREMENTS = "decrements"
NET = "net"
VALUE = "value"


def counter_frame(counter: Counter) -> pd.DataFrame:
    """One row per replica, sorted by replica id.

    GCounter columns: ``replica, count``.
    PNCounter columns: ``replica, increments, decrements, net``.
    """
    if isinstance(counter, GCounter):
        rows = [(r, counter.replica_value(r)) for r in counter.replicas]
        return pd.DataFrame(rows, columns=[REPLICA, COUNT])

    if isinstance(counter, PNCounter):
        p, n = counter.positive, counter.negative
        rows = [
            (r, p.replica_value(r), n.replica_value(r), counter.replica_value(r))
            for r in counter.replicas
        ]
        return pd.DataFrame(rows, columns=[REPLICA, INCREMENTS, DECREMENTS, NET])

    raise TypeError(f"expected GCounter or PNCounter, got {type(counter).__name__}")


def replica_table(views: Mapping[str, Counter]) -> pd.DataFrame:
    """Compare several holders' views of one logical counter.

    Args:
        views: Holder name -> that holder's counter.

    Returns:
        DataFrame indexed by holder. One column per replica id seen by any
        holder (0 where a holder has no entry; signed net for PNCounters),
        then a ``value`` column.
    """
    replicas = sorted({r for counter in views.values() for r in counter.replicas})
    rows = []
    for counter in views.values():
        row = {r: counter.replica_value(r) for r in replicas}
        row[VALUE] = counter.value()
        rows.append(row)

    return pd.DataFrame(rows, index=pd.Index(list(views), name="holder"), columns=[*replicas, VALUE])


def converged(views: Mapping[str, Counter]) -> bool:
    """True when every view holds the same state."""
    counters = list(views.values())
    return all(c == counters[0] for c in counters[1:])

