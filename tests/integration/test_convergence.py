"""Convergence of replicas under arbitrary exchange schedules.

Each test drives several replicas through random local updates, then
exchanges state in shuffled order with duplicated deliveries, and checks
that every replica ends at the same state and the expected value.
"""

import random

import pytest

from crdt_counters import GCounter, PNCounter, converged

SEEDS = range(20)


def _exchange(replicas: dict, rng: random.Random, rounds: int = 3) -> None:
    """Gossip full-state snapshots between random pairs, with duplicates."""
    names = list(replicas)
    for _ in range(rounds):
        pairs = [(src, dst) for src in names for dst in names if src != dst]
        pairs += rng.choices(pairs, k=len(pairs))
        rng.shuffle(pairs)
        for src, dst in pairs:
            replicas[dst].merge(replicas[src].copy())


class TestGCounterConvergence:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_replicas_converge_to_total(self, seed):
        rng = random.Random(seed)
        replicas = {f"r{i}": GCounter() for i in range(rng.randint(2, 5))}
        expected = 0
        for _ in range(50):
            name = rng.choice(list(replicas))
            amount = rng.randint(0, 100)
            replicas[name].inc(name, amount)
            expected += amount

        _exchange(replicas, rng)

        assert converged(replicas)
        assert all(r.value() == expected for r in replicas.values())

    @pytest.mark.parametrize("seed", SEEDS)
    def test_value_is_monotonic(self, seed):
        rng = random.Random(seed)
        local = GCounter()
        peer = GCounter()
        last = local.value()
        for _ in range(100):
            step = rng.random()
            if step < 0.4:
                local.inc("local", rng.randint(0, 10))
            elif step < 0.8:
                peer.inc("peer", rng.randint(0, 10))
            else:
                local.merge(peer.copy())
            assert local.value() >= last
            last = local.value()

    @pytest.mark.parametrize("seed", SEEDS)
    def test_merge_order_does_not_matter(self, seed):
        rng = random.Random(seed)
        states = []
        for i in range(4):
            c = GCounter()
            for _ in range(rng.randint(0, 6)):
                c.inc(rng.choice("abcde"), rng.randint(0, 50))
            states.append(c)

        results = []
        for _ in range(5):
            order = states[:]
            rng.shuffle(order)
            acc = GCounter()
            for s in order + rng.sample(order, k=2):
                acc.merge(s)
            results.append(acc)

        assert all(r == results[0] for r in results)


class TestPNCounterConvergence:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_two_replicas_interleaved(self, seed):
        rng = random.Random(seed)
        a, b = PNCounter(), PNCounter()
        expected = 0
        for _ in range(60):
            name, counter = rng.choice([("a", a), ("b", b)])
            amount = rng.randint(0, 25)
            if rng.random() < 0.5:
                counter.inc(name, amount)
                expected += amount
            else:
                counter.dec(name, amount)
                expected -= amount

            if rng.random() < 0.2:
                # partial sync mid-stream, sometimes duplicated
                a.merge(b.copy())
                if rng.random() < 0.5:
                    a.merge(b.copy())

        ab = a.copy()
        ab.merge(b)
        ba = b.copy()
        ba.merge(a)
        ba.merge(a)

        assert ab == ba
        assert ab.value() == ba.value() == expected

    @pytest.mark.parametrize("seed", SEEDS)
    def test_many_replicas_converge(self, seed):
        rng = random.Random(seed)
        replicas = {f"r{i}": PNCounter() for i in range(rng.randint(2, 5))}
        expected = 0
        for _ in range(80):
            name = rng.choice(list(replicas))
            amount = rng.randint(0, 40)
            if rng.random() < 0.6:
                replicas[name].inc(name, amount)
                expected += amount
            else:
                replicas[name].dec(name, amount)
                expected -= amount

        _exchange(replicas, rng)

        assert converged(replicas)
        assert {r.value() for r in replicas.values()} == {expected}

    def test_serialized_exchange(self, pncounter_pair):
        a, b = pncounter_pair
        a.merge(PNCounter.from_dict(b.to_dict()))
        b.merge(PNCounter.from_dict(a.to_dict()))
        assert a == b
        assert a.value() == b.value() == 18
