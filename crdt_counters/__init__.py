"""State-based counter CRDTs.

- **GCounter**: grow-only counter (increment only)
- **PNCounter**: positive-negative counter (increment and decrement)

Replicas update their own entries locally and reconcile with ``merge``;
merge is commutative, associative and idempotent, so replicas that have
seen the same updates converge regardless of exchange order or
duplication. Transport, replica identity and persistence are left to
the embedding application.
"""

import logging

from crdt_counters.config import DEFAULT_CONFIG, CounterConfig
from crdt_counters.errors import (
    ConversionError,
    CounterError,
    CounterOverflowError,
    MalformedStateError,
)
from crdt_counters.frames import converged, counter_frame, replica_table
from crdt_counters.g_counter import GCounter
from crdt_counters.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    set_level,
)
from crdt_counters.pn_counter import PNCounter
from crdt_counters.protocol import CRDT

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Counters
    "CRDT",
    "GCounter",
    "PNCounter",
    # Config
    "CounterConfig",
    "DEFAULT_CONFIG",
    # Errors
    "ConversionError",
    "CounterError",
    "CounterOverflowError",
    "MalformedStateError",
    # Analysis
    "converged",
    "counter_frame",
    "replica_table",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "set_level",
    "__version__",
]
