"""Infrastructure adapters."""

from ayur_core_lib.infrastructure.redis_setup import (
    RedisSettings,
    build_redis_client,
    get_redis_client,
    parse_sentinel_hosts,
)

__all__ = [
    "RedisSettings",
    "build_redis_client",
    "get_redis_client",
    "parse_sentinel_hosts",
]
