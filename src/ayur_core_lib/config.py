"""Environment-driven configuration and backend factories.

Environment Variables:
    AYUR_STORE_BACKEND: "memory" (default), "redis", or "remote"
    AYUR_CASE_SERVICE_URL: Base URL of the remote case service
    AYUR_CASE_KEY_PREFIX: Redis key prefix for cases (default: "ayur:case:")
    AYUR_CASE_TTL_SECONDS: Redis expiry for cases, 0 = never (default: 0)
    AYUR_COUNTER_KEY: Redis hash holding analytics counters (default: "ayur:counters")
    AYUR_HTTP_TIMEOUT: Remote case service timeout in seconds (default: 30.0)
    LOG_LEVEL: Level used by configure_logging() (default: INFO)
    REDIS_*: see ayur_core_lib.infrastructure.redis_setup

Explicit arguments always win over environment variables. Invalid values fall
back to the default with a warning.

Example:
    ```python
    configure_logging()
    settings = EngineSettings.from_env()
    aggregator = await build_aggregator(settings)
    ```
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from redis.asyncio import Redis

from ayur_core_lib.analytics.counters import (
    DEFAULT_COUNTER_KEY,
    CounterSink,
    InMemoryCounterSink,
    RedisCounterSink,
)
from ayur_core_lib.clients.case_service_client import CaseServiceClient
from ayur_core_lib.core.aggregator import CaseAggregator
from ayur_core_lib.infrastructure.redis_setup import RedisSettings, get_redis_client
from ayur_core_lib.storage.base import CaseStore
from ayur_core_lib.storage.memory import InMemoryCaseStore
from ayur_core_lib.storage.redis_store import DEFAULT_KEY_PREFIX, RedisCaseStore
from ayur_core_lib.utils.env import env_number

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class StoreBackend(Enum):
    """Where cases live."""

    MEMORY = "memory"  # Process-local dict, development and tests
    REDIS = "redis"  # Shared Redis (standalone or Sentinel)
    REMOTE = "remote"  # Remote case service over HTTP


def _env_backend(value: Optional[str]) -> StoreBackend:
    raw = value or os.getenv("AYUR_STORE_BACKEND", "memory")
    try:
        return StoreBackend(raw.lower())
    except ValueError:
        logger.warning(f"Invalid AYUR_STORE_BACKEND '{raw}', defaulting to 'memory'")
        return StoreBackend.MEMORY


@dataclass
class EngineSettings:
    store_backend: StoreBackend = StoreBackend.MEMORY
    case_service_url: Optional[str] = None
    case_key_prefix: str = DEFAULT_KEY_PREFIX
    case_ttl_seconds: int = 0
    counter_key: str = DEFAULT_COUNTER_KEY
    http_timeout: float = 30.0
    log_level: str = "INFO"
    redis: RedisSettings = field(default_factory=RedisSettings)

    @classmethod
    def from_env(cls, **overrides) -> "EngineSettings":
        """Read settings from the environment; keyword overrides take precedence."""
        backend = overrides.pop("store_backend", None)
        if isinstance(backend, StoreBackend):
            store_backend = backend
        else:
            store_backend = _env_backend(backend)

        settings = cls(
            store_backend=store_backend,
            case_service_url=os.getenv("AYUR_CASE_SERVICE_URL") or None,
            case_key_prefix=os.getenv("AYUR_CASE_KEY_PREFIX", DEFAULT_KEY_PREFIX),
            case_ttl_seconds=env_number("AYUR_CASE_TTL_SECONDS", 0, int),
            counter_key=os.getenv("AYUR_COUNTER_KEY", DEFAULT_COUNTER_KEY),
            http_timeout=env_number("AYUR_HTTP_TIMEOUT", 30.0, float),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            redis=RedisSettings.from_env(),
        )
        for name, value in overrides.items():
            if not hasattr(settings, name):
                raise TypeError(f"Unknown setting: {name}")
            setattr(settings, name, value)
        return settings


def configure_logging(level: Optional[str] = None) -> None:
    """Opt-in root logging setup. The library itself never configures logging."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        logger.warning(f"Invalid LOG_LEVEL '{level_name}', defaulting to INFO")
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)


async def build_backends(
    settings: Optional[EngineSettings] = None,
    redis_client: Optional[Redis] = None,
) -> Tuple[CaseStore, CounterSink]:
    """Create the case store and counter sink selected by settings.

    Redis-backed store and counters share one client. The remote backend
    keeps counters in process memory.

    Raises:
        ValueError: remote backend without AYUR_CASE_SERVICE_URL
    """
    settings = settings or EngineSettings.from_env()

    if settings.store_backend == StoreBackend.REDIS:
        client = redis_client or await get_redis_client(settings.redis)
        store: CaseStore = RedisCaseStore(
            client,
            key_prefix=settings.case_key_prefix,
            ttl_seconds=settings.case_ttl_seconds,
        )
        counters: CounterSink = RedisCounterSink(client, key=settings.counter_key)
    elif settings.store_backend == StoreBackend.REMOTE:
        if not settings.case_service_url:
            raise ValueError("AYUR_CASE_SERVICE_URL is required for the remote store backend")
        store = CaseServiceClient(
            base_url=settings.case_service_url,
            timeout=settings.http_timeout,
        )
        counters = InMemoryCounterSink()
    else:
        store = InMemoryCaseStore()
        counters = InMemoryCounterSink()

    logger.info(
        f"Backends ready: store={store.__class__.__name__}, counters={counters.__class__.__name__}"
    )
    return store, counters


async def build_aggregator(
    settings: Optional[EngineSettings] = None,
    redis_client: Optional[Redis] = None,
) -> CaseAggregator:
    store, counters = await build_backends(settings, redis_client=redis_client)
    return CaseAggregator(store=store, counters=counters)
