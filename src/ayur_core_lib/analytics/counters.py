"""Analytics counters.

Counters are best effort. The engine calls them through safe_increment(), which
never lets a sink failure reach the caller or affect a gate decision.
"""

import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict

from redis.asyncio import Redis

logger = logging.getLogger(__name__)

ADVANCED_INPUT_TRIGGER = "advanced_input_trigger"
SAFETY_FLAG = "safety_flag"
DROP_OFF_PREFIX = "drop_off:"

DEFAULT_COUNTER_KEY = "ayur:counters"


def drop_off_counter(stage: str) -> str:
    return f"{DROP_OFF_PREFIX}{stage}"


class CounterSink(ABC):
    """Named monotonically increasing counters."""

    @abstractmethod
    async def increment_counter(self, name: str) -> None:
        ...

    @abstractmethod
    async def get_counters(self) -> Dict[str, int]:
        ...


class NullCounterSink(CounterSink):
    """Discards every increment."""

    async def increment_counter(self, name: str) -> None:
        return None

    async def get_counters(self) -> Dict[str, int]:
        return {}


class InMemoryCounterSink(CounterSink):
    """Process-local counters; also a recording stub for tests."""

    def __init__(self):
        self._counts: Counter = Counter()

    async def increment_counter(self, name: str) -> None:
        self._counts[name] += 1

    async def get_counters(self) -> Dict[str, int]:
        return dict(self._counts)

    def snapshot(self) -> Dict[str, int]:
        return dict(self._counts)


class RedisCounterSink(CounterSink):
    """Counters kept as fields of one Redis hash."""

    def __init__(self, client: Redis, key: str = DEFAULT_COUNTER_KEY):
        self._client = client
        self._key = key

    async def increment_counter(self, name: str) -> None:
        await self._client.hincrby(self._key, name, 1)

    async def get_counters(self) -> Dict[str, int]:
        raw = await self._client.hgetall(self._key)
        counters: Dict[str, int] = {}
        for name, value in raw.items():
            if isinstance(name, bytes):
                name = name.decode()
            counters[name] = int(value)
        return counters


async def safe_increment(sink: CounterSink, name: str) -> None:
    """Fire-and-forget increment. Failures are logged and swallowed."""
    try:
        await sink.increment_counter(name)
    except Exception as e:  # noqa: BLE001
        logger.warning(f"Analytics counter '{name}' increment failed (non-fatal): {e}")
