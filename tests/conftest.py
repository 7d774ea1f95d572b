"""
Shared pytest fixtures for crdt_counters tests.
"""

import logging

import pytest

from crdt_counters import GCounter, PNCounter


@pytest.fixture
def gcounter_pair() -> tuple[GCounter, GCounter]:
    """Two diverged G-Counters: a={a:13, b:20}, b={a:10, b:21}."""
    a = GCounter()
    a.inc("a", 13)
    a.inc("b", 20)

    b = GCounter()
    b.inc("a", 10)
    b.inc("b", 21)
    return a, b


@pytest.fixture
def pncounter_pair() -> tuple[PNCounter, PNCounter]:
    """Two diverged PN-Counters that merge to a value of 18."""
    a = PNCounter()
    a.inc("a", 10)
    a.dec("a", 2)
    a.inc("b", 12)

    b = PNCounter()
    b.inc("a", 10)
    b.inc("b", 12)
    b.dec("b", 2)
    return a, b


@pytest.fixture(autouse=True)
def reset_crdt_counters_logging():
    """Reset the package logger before and after each test.

    Removes every handler but a fresh NullHandler and resets the level to
    NOTSET so one test's logging setup cannot leak into another.
    """
    logger = logging.getLogger("crdt_counters")

    def reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    reset()
    yield
    reset()
