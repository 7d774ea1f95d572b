"""Counter convergence demo: eventual consistency after a partition.

Architecture::

    inc/dec ──► replica-a ◄──state exchange──► replica-b ◄── inc/dec
                                 ▲
                          (partitioned for a while)

Demonstrates:
1. Both replicas accept updates independently (no coordination).
2. While partitioned, their values diverge.
3. Once exchanges resume, merge converges them, even with duplicated
   and reordered deliveries.
4. The final value is every increment minus every decrement.
"""

import random

import crdt_counters
from crdt_counters import PNCounter, converged, counter_frame, replica_table


def exchange(replicas: dict[str, PNCounter]) -> None:
    """Ship each replica's serialized state to every other replica."""
    snapshots = {name: counter.to_dict() for name, counter in replicas.items()}
    for name, counter in replicas.items():
        for peer, state in snapshots.items():
            if peer != name:
                counter.merge(PNCounter.from_dict(state))


def main():
    crdt_counters.configure_from_env()
    rng = random.Random(7)

    replicas = {"replica-a": PNCounter(), "replica-b": PNCounter()}
    expected = 0

    def update(rounds: int) -> None:
        nonlocal expected
        for _ in range(rounds):
            name = rng.choice(list(replicas))
            amount = rng.randint(1, 10)
            if rng.random() < 0.7:
                replicas[name].inc(name, amount)
                expected += amount
            else:
                replicas[name].dec(name, amount)
                expected -= amount

    # --- Phase 1: connected ---
    update(10)
    exchange(replicas)

    # --- Phase 2: partitioned, no exchanges ---
    update(20)

    print("=" * 60)
    print("During partition")
    print("=" * 60)
    print(replica_table(replicas))
    print(f"Converged: {converged(replicas)}")
    print()

    # --- Phase 3: healed, exchanges duplicated for good measure ---
    exchange(replicas)
    exchange(replicas)

    print("=" * 60)
    print("After partition heals")
    print("=" * 60)
    print(replica_table(replicas))
    print(f"Converged: {converged(replicas)}")
    print(f"Expected value: {expected}")
    print()
    print("Per-replica contributions (replica-a's view):")
    print(counter_frame(replicas["replica-a"]).to_string(index=False))


if __name__ == "__main__":
    main()
