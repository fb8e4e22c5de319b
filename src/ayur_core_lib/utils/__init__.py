"""Utility Functions"""

from ayur_core_lib.utils.resilience import (
    redis_startup_retry,
    create_custom_retry,
)
from ayur_core_lib.utils.serialization import to_json_compatible

__all__ = [
    "redis_startup_retry",
    "create_custom_retry",
    "to_json_compatible",
]
