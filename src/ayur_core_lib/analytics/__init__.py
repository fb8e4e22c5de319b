"""Best-effort analytics counters injected into the case aggregator."""

from ayur_core_lib.analytics.counters import (
    ADVANCED_INPUT_TRIGGER,
    SAFETY_FLAG,
    DROP_OFF_PREFIX,
    CounterSink,
    NullCounterSink,
    InMemoryCounterSink,
    RedisCounterSink,
    drop_off_counter,
    safe_increment,
)

__all__ = [
    "ADVANCED_INPUT_TRIGGER",
    "SAFETY_FLAG",
    "DROP_OFF_PREFIX",
    "CounterSink",
    "NullCounterSink",
    "InMemoryCounterSink",
    "RedisCounterSink",
    "drop_off_counter",
    "safe_increment",
]
