"""Redis-backed case store.

Each case is one JSON document under ``{key_prefix}{case_id}``. Updates run as
WATCH/MULTI optimistic transactions: if another writer touches the key between
read and write, the transaction aborts with WatchError and the same fields are
merged again into the fresh document. Fields the other writer changed survive
unless this update also sends them; ``status_history`` is sent whole, so it is
last-write-wins (see ayur_core_lib.storage.base).
"""

import logging
from typing import Any, Dict, List, Optional

from redis.asyncio import Redis
from redis.exceptions import WatchError

from ayur_core_lib.exceptions import CaseNotFoundError, EngineError
from ayur_core_lib.models.case import Case, UserContext
from ayur_core_lib.storage.base import CaseStore, merge_case
from ayur_core_lib.utils.resilience import create_custom_retry

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "ayur:case:"

optimistic_retry = create_custom_retry(
    max_attempts=10,
    min_wait=0,
    max_wait=0.2,
    multiplier=0.01,
    retry_on=(WatchError,),
)


class RedisCaseStore(CaseStore):
    """Case store on an async Redis client (standalone or Sentinel master).

    Usage:
        client = await get_redis_client()
        store = RedisCaseStore(client, ttl_seconds=7 * 24 * 3600)
        case = await store.create(user_context)
    """

    def __init__(
        self,
        client: Redis,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        ttl_seconds: Optional[int] = None,
    ):
        """Initialize store.

        Args:
            client: Async Redis client (decode_responses may be on or off)
            key_prefix: Prefix for case keys
            ttl_seconds: Expiry applied at creation; None or 0 keeps cases forever
        """
        self._client = client
        self._key_prefix = key_prefix
        self._ttl = ttl_seconds or None

    def _key(self, case_id: str) -> str:
        return f"{self._key_prefix}{case_id}"

    async def create(self, user_context: UserContext) -> Case:
        case = Case(user_context=user_context)
        stored = await self._client.set(
            self._key(case.case_id),
            case.model_dump_json(),
            ex=self._ttl,
            nx=True,
        )
        if not stored:
            raise EngineError(f"Case id collision for {case.case_id}")
        logger.info(f"Created case {case.case_id} in Redis")
        return case

    async def get(self, case_id: str) -> Case:
        raw = await self._client.get(self._key(case_id))
        if raw is None:
            raise CaseNotFoundError(case_id)
        return Case.model_validate_json(raw)

    @optimistic_retry
    async def update(self, case_id: str, fields: Dict[str, Any]) -> Case:
        key = self._key(case_id)
        async with self._client.pipeline(transaction=True) as pipe:
            await pipe.watch(key)
            raw = await pipe.get(key)
            if raw is None:
                raise CaseNotFoundError(case_id)

            merged = merge_case(Case.model_validate_json(raw), fields)

            pipe.multi()
            pipe.set(key, merged.model_dump_json(), keepttl=True)
            await pipe.execute()

        return merged

    async def list_cases(self) -> List[Case]:
        keys = [key async for key in self._client.scan_iter(match=f"{self._key_prefix}*")]
        if not keys:
            return []
        values = await self._client.mget(keys)
        return [Case.model_validate_json(raw) for raw in values if raw is not None]

    async def close(self) -> None:
        await self._client.aclose()
