"""In-memory case store for development and tests."""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Dict, List

from ayur_core_lib.exceptions import CaseNotFoundError
from ayur_core_lib.models.case import Case, UserContext
from ayur_core_lib.storage.base import CaseStore, merge_case

logger = logging.getLogger(__name__)


class InMemoryCaseStore(CaseStore):
    """Dict-backed store with one asyncio.Lock per case id.

    Not shared across processes; use RedisCaseStore for that.
    """

    def __init__(self):
        self._cases: Dict[str, Case] = {}
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def create(self, user_context: UserContext) -> Case:
        case = Case(user_context=user_context)
        self._cases[case.case_id] = case
        logger.debug(f"Stored new case {case.case_id}")
        return case

    async def get(self, case_id: str) -> Case:
        case = self._cases.get(case_id)
        if case is None:
            raise CaseNotFoundError(case_id)
        return case

    async def update(self, case_id: str, fields: Dict[str, Any]) -> Case:
        if case_id not in self._cases:
            raise CaseNotFoundError(case_id)
        async with self._locks[case_id]:
            existing = await self.get(case_id)
            merged = merge_case(existing, fields)
            self._cases[case_id] = merged
            return merged

    async def list_cases(self) -> List[Case]:
        return list(self._cases.values())
