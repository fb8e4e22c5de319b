"""Retry policies for the I/O edges of the engine.

Three places talk to something that can fail transiently:
- the Redis ping at startup (``redis_startup_retry``)
- optimistic Redis transactions that lose a WATCH race
- HTTP calls to a remote case service

Scorers are pure and are never wrapped.
"""

import logging
from typing import Callable, Tuple, Type, TypeVar

from tenacity import (
    RetryCallState,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorTypes = Tuple[Type[BaseException], ...]


def _warn_before_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    error = outcome.exception() if outcome is not None else None
    name = getattr(retry_state.fn, "__qualname__", "call")
    logger.warning(
        f"[Resilience] {name} failed on attempt {retry_state.attempt_number} "
        f"({type(error).__name__}: {error}); retrying"
    )


# Redis may come up after the app in a fresh deployment.
# Backoff 2s, 4s, 8s, 16s; gives up after the fifth attempt.
redis_startup_retry = retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=2, max=32),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


def create_custom_retry(
    max_attempts: int = 5,
    min_wait: float = 2,
    max_wait: float = 32,
    multiplier: float = 1,
    retry_on: ErrorTypes = (Exception,),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Build a retry decorator limited to the given exception types.

    Works on plain and ``async`` functions. Exceptions outside ``retry_on``
    propagate on the first attempt; the last error is re-raised once
    ``max_attempts`` is spent.

    Example:
        ```python
        transport_retry = create_custom_retry(
            max_attempts=3, min_wait=0.5, max_wait=4, retry_on=(httpx.TransportError,)
        )
        ```
    """
    return retry(
        retry=retry_if_exception_type(retry_on),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        before_sleep=_warn_before_retry,
        reraise=True,
    )
