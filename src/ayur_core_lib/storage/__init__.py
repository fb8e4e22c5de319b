"""Case storage backends behind the CaseStore contract."""

from ayur_core_lib.storage.base import CaseStore, merge_case
from ayur_core_lib.storage.memory import InMemoryCaseStore
from ayur_core_lib.storage.redis_store import RedisCaseStore

__all__ = [
    "CaseStore",
    "merge_case",
    "InMemoryCaseStore",
    "RedisCaseStore",
]
