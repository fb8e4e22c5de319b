"""
Tests for environment configuration, backend factories and retry helpers.
"""
from unittest.mock import AsyncMock

import pytest

from ayur_core_lib.clients import CaseServiceClient
from ayur_core_lib.config import (
    EngineSettings,
    StoreBackend,
    build_aggregator,
    build_backends,
    configure_logging,
)
from ayur_core_lib.analytics.counters import InMemoryCounterSink, RedisCounterSink
from ayur_core_lib.infrastructure.redis_setup import RedisSettings, parse_sentinel_hosts
from ayur_core_lib.storage.memory import InMemoryCaseStore
from ayur_core_lib.storage.redis_store import RedisCaseStore
from ayur_core_lib.utils import create_custom_retry


class TestEngineSettings:

    def test_defaults(self, monkeypatch):
        for name in ("AYUR_STORE_BACKEND", "AYUR_CASE_TTL_SECONDS", "AYUR_HTTP_TIMEOUT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = EngineSettings.from_env()
        assert settings.store_backend == StoreBackend.MEMORY
        assert settings.case_key_prefix == "ayur:case:"
        assert settings.counter_key == "ayur:counters"
        assert settings.http_timeout == 30.0
        assert settings.case_ttl_seconds == 0

    def test_environment_values(self, monkeypatch):
        monkeypatch.setenv("AYUR_STORE_BACKEND", "REDIS")
        monkeypatch.setenv("AYUR_CASE_TTL_SECONDS", "86400")
        monkeypatch.setenv("AYUR_HTTP_TIMEOUT", "2.5")
        settings = EngineSettings.from_env()
        assert settings.store_backend == StoreBackend.REDIS
        assert settings.case_ttl_seconds == 86400
        assert settings.http_timeout == 2.5

    def test_invalid_values_fall_back(self, monkeypatch, caplog):
        monkeypatch.setenv("AYUR_STORE_BACKEND", "floppy-disk")
        monkeypatch.setenv("AYUR_CASE_TTL_SECONDS", "soon")
        settings = EngineSettings.from_env()
        assert settings.store_backend == StoreBackend.MEMORY
        assert settings.case_ttl_seconds == 0
        assert "AYUR_STORE_BACKEND" in caplog.text

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setenv("AYUR_STORE_BACKEND", "redis")
        monkeypatch.setenv("AYUR_CASE_SERVICE_URL", "http://from-env")
        settings = EngineSettings.from_env(
            store_backend="remote", case_service_url="http://explicit"
        )
        assert settings.store_backend == StoreBackend.REMOTE
        assert settings.case_service_url == "http://explicit"

    def test_unknown_override(self):
        with pytest.raises(TypeError):
            EngineSettings.from_env(colour="blue")


class TestBuildBackends:

    @pytest.mark.asyncio
    async def test_memory(self):
        store, counters = await build_backends(EngineSettings())
        assert isinstance(store, InMemoryCaseStore)
        assert isinstance(counters, InMemoryCounterSink)

    @pytest.mark.asyncio
    async def test_redis_shares_one_client(self):
        client = AsyncMock()
        settings = EngineSettings(store_backend=StoreBackend.REDIS, case_ttl_seconds=60)
        store, counters = await build_backends(settings, redis_client=client)
        assert isinstance(store, RedisCaseStore)
        assert isinstance(counters, RedisCounterSink)

    @pytest.mark.asyncio
    async def test_remote_requires_url(self):
        with pytest.raises(ValueError):
            await build_backends(EngineSettings(store_backend=StoreBackend.REMOTE))

    @pytest.mark.asyncio
    async def test_remote(self):
        settings = EngineSettings(store_backend=StoreBackend.REMOTE, case_service_url="http://cases")
        aggregator = await build_aggregator(settings)
        assert isinstance(aggregator.store, CaseServiceClient)
        assert aggregator.store.base_url == "http://cases"


class TestRedisSettings:

    def test_sentinel_hosts(self):
        assert parse_sentinel_hosts("s1:26380, s2,,") == [("s1", 26380), ("s2", 26379)]

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("REDIS_MODE", "Sentinel")
        monkeypatch.setenv("REDIS_PORT", "6380")
        settings = RedisSettings.from_env()
        assert settings.mode == "sentinel"
        assert settings.port == 6380

    def test_bad_numbers_fall_back_with_warning(self, monkeypatch, caplog):
        monkeypatch.setenv("REDIS_PORT", "six-three-seven-nine")
        monkeypatch.setenv("REDIS_DB", "-1")
        settings = RedisSettings.from_env()
        assert settings.port == 6379
        assert settings.db == 0
        assert "REDIS_PORT" in caplog.text
        assert "REDIS_DB" in caplog.text

    def test_engine_settings_survive_bad_redis_port(self, monkeypatch):
        monkeypatch.setenv("REDIS_PORT", "not-a-port")
        monkeypatch.setenv("AYUR_STORE_BACKEND", "redis")
        settings = EngineSettings.from_env()
        assert settings.redis.port == 6379


class TestHelpers:

    def test_retry_only_on_listed_errors(self):
        calls = []

        @create_custom_retry(max_attempts=3, min_wait=0, max_wait=0, retry_on=(KeyError,))
        def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise KeyError("again")
            return "ok"

        assert flaky() == "ok"
        assert len(calls) == 3

        @create_custom_retry(max_attempts=3, min_wait=0, max_wait=0, retry_on=(KeyError,))
        def broken():
            calls.append(1)
            raise ValueError("no retry")

        calls.clear()
        with pytest.raises(ValueError):
            broken()
        assert len(calls) == 1

    def test_configure_logging_warns_on_bad_level(self, caplog):
        configure_logging("chatty")
        assert "Invalid LOG_LEVEL 'CHATTY'" in caplog.text
