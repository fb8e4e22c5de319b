"""Redis connection factory for the case store and counter sink.

Supports standalone Redis (development) and Redis Sentinel (HA deployments)
behind one entry point, selected by REDIS_MODE.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from redis.asyncio import Redis
from redis.asyncio.sentinel import Sentinel

from ayur_core_lib.utils import redis_startup_retry
from ayur_core_lib.utils.env import env_number

logger = logging.getLogger(__name__)

DEFAULT_SENTINEL_PORT = 26379


@dataclass(frozen=True)
class RedisSettings:
    """Connection parameters. from_env() reads the REDIS_* variables."""

    mode: str = "standalone"
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    sentinel_hosts: str = ""
    master_set: str = "mymaster"
    health_check_interval: int = 30

    @classmethod
    def from_env(cls) -> "RedisSettings":
        return cls(
            mode=os.getenv("REDIS_MODE", "standalone").lower(),
            host=os.getenv("REDIS_HOST", "localhost"),
            port=env_number("REDIS_PORT", 6379, int),
            db=env_number("REDIS_DB", 0, int),
            password=os.getenv("REDIS_PASSWORD") or None,
            sentinel_hosts=os.getenv("REDIS_SENTINEL_HOSTS", ""),
            master_set=os.getenv("REDIS_MASTER_SET", "mymaster"),
        )


def parse_sentinel_hosts(hosts_str: str) -> List[Tuple[str, int]]:
    """Parse "host1:26379,host2" into [("host1", 26379), ("host2", 26379)]."""
    sentinels = []
    for host_port in hosts_str.split(","):
        host_port = host_port.strip()
        if not host_port:
            continue
        if ":" in host_port:
            host, port_str = host_port.rsplit(":", 1)
            sentinels.append((host, int(port_str)))
        else:
            sentinels.append((host_port, DEFAULT_SENTINEL_PORT))
    return sentinels


@redis_startup_retry
async def _verify_redis_connection(client: Redis) -> None:
    await client.ping()
    logger.info("Redis connection verified")


def build_redis_client(settings: RedisSettings) -> Redis:
    """Construct (but do not connect) an async client for the given settings.

    Raises:
        ValueError: Sentinel mode without any sentinel hosts
    """
    if settings.mode == "sentinel":
        sentinels = parse_sentinel_hosts(settings.sentinel_hosts)
        if not sentinels:
            raise ValueError(
                "REDIS_SENTINEL_HOSTS must list at least one host:port for Sentinel mode"
            )
        logger.info(
            f"Using Redis Sentinel: master={settings.master_set}, sentinels={sentinels}"
        )
        sentinel = Sentinel(
            sentinels,
            sentinel_kwargs={"password": settings.password} if settings.password else {},
            socket_keepalive=True,
            health_check_interval=settings.health_check_interval,
        )
        return sentinel.master_for(
            settings.master_set,
            db=settings.db,
            password=settings.password,
            decode_responses=True,
            socket_keepalive=True,
            health_check_interval=settings.health_check_interval,
        )

    logger.info(f"Using standalone Redis: {settings.host}:{settings.port}/{settings.db}")
    return Redis(
        host=settings.host,
        port=settings.port,
        db=settings.db,
        password=settings.password,
        decode_responses=True,
        socket_keepalive=True,
        health_check_interval=settings.health_check_interval,
        socket_connect_timeout=5,
    )


async def get_redis_client(settings: Optional[RedisSettings] = None, **overrides) -> Redis:
    """Build a client and verify it with a startup-retried PING.

    Args:
        settings: Connection settings (default: RedisSettings.from_env())
        **overrides: Individual RedisSettings fields taking precedence

    Raises:
        ValueError: Sentinel mode is configured without sentinel hosts
        ConnectionError: Redis still unreachable after the startup retries
    """
    settings = settings or RedisSettings.from_env()
    if overrides:
        settings = replace(settings, **overrides)

    client = build_redis_client(settings)
    await _verify_redis_connection(client)
    return client
