"""Exponential backoff executor built on tenacity.

Runs an async operation, retrying transient failures with exponential delay
plus jitter, and reports the outcome as a ``RetryResult`` instead of raising.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NETWORK_TOKENS = ("fetch", "network", "timeout")
_TRANSIENT_TOKENS = ("rate limit", "503", "429", "500", "502", "timeout", "deadline")


def default_is_retryable_error(error: BaseException) -> bool:
    """Treat network failures, rate limiting, 5xx and timeouts as retryable.

    Matching is done on the lowercased error message. Network-class errors
    (``TypeError``, ``ConnectionError``) only match the network tokens.
    """
    if isinstance(error, (TypeError, ConnectionError)):
        message = str(error).lower()
        return any(token in message for token in _NETWORK_TOKENS)

    if isinstance(error, Exception):
        message = str(error).lower()
        return any(token in message for token in _TRANSIENT_TOKENS)

    return False


@dataclass(frozen=True)
class RetryOptions:
    """Retry configuration for a single execution.

    Attributes:
        max_attempts: Maximum number of calls, including the first one
        initial_delay_ms: Delay before the first retry
        max_delay_ms: Ceiling for the exponential part of the delay
        backoff_multiplier: Growth factor between consecutive delays
        jitter_factor: Random extra delay as a fraction of the delay (0.0-1.0)
        is_retryable_error: Predicate deciding whether a failure is transient
        on_retry: Observer called as ``on_retry(attempt, error, next_delay_ms)``
    """

    max_attempts: int = 3
    initial_delay_ms: float = 1000
    max_delay_ms: float = 30000
    backoff_multiplier: float = 2.0
    jitter_factor: float = 0.1
    is_retryable_error: Callable[[BaseException], bool] = default_is_retryable_error
    on_retry: Optional[Callable[[int, BaseException, int], None]] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.initial_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("delays must be non-negative")
        if self.backoff_multiplier <= 1:
            raise ValueError("backoff_multiplier must be > 1")
        if not 0.0 <= self.jitter_factor < 1.0:
            raise ValueError("jitter_factor must be in [0, 1)")


@dataclass
class RetryResult(Generic[T]):
    """Outcome of ``with_exponential_backoff``"""

    success: bool
    attempts: int
    total_time_ms: int
    data: Optional[T] = None
    error: Optional[BaseException] = None


def calculate_delay(
    attempt: int,
    initial_delay_ms: float,
    max_delay_ms: float,
    backoff_multiplier: float,
    jitter_factor: float,
) -> int:
    """Delay in milliseconds to wait after the given failed attempt."""
    # initial_delay * multiplier ^ (attempt - 1), capped before jitter
    delay = min(initial_delay_ms * math.pow(backoff_multiplier, attempt - 1), max_delay_ms)
    jitter = delay * jitter_factor * random.random()
    return math.floor(delay + jitter)


async def _sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


async def with_exponential_backoff(
    operation: Callable[[], Awaitable[T]],
    options: Optional[RetryOptions] = None,
    **overrides: Any,
) -> RetryResult[T]:
    """Execute an async operation with exponential backoff.

    Args:
        operation: Zero-argument coroutine function; may be called up to
            ``max_attempts`` times, so it must tolerate re-invocation
        options: Retry options (defaults used if None)
        **overrides: Individual ``RetryOptions`` fields merged over ``options``

    Returns:
        RetryResult with the data on success, or the last error on failure
    """
    options = options or RetryOptions()
    if overrides:
        options = dataclasses.replace(options, **overrides)

    def _wait(retry_state: RetryCallState) -> float:
        delay_ms = calculate_delay(
            retry_state.attempt_number,
            options.initial_delay_ms,
            options.max_delay_ms,
            options.backoff_multiplier,
            options.jitter_factor,
        )
        return delay_ms / 1000.0

    def _should_retry(retry_state: RetryCallState) -> bool:
        # The last attempt is never classified, and only Exception subclasses
        # reach the predicate; cancellation is re-raised by tenacity as is.
        if retry_state.outcome is None or not retry_state.outcome.failed:
            return False
        if retry_state.attempt_number >= options.max_attempts:
            return False
        error = retry_state.outcome.exception()
        return isinstance(error, Exception) and options.is_retryable_error(error)

    def _before_sleep(retry_state: RetryCallState) -> None:
        if options.on_retry is None or retry_state.outcome is None:
            return
        next_delay_ms = int(round(retry_state.next_action.sleep * 1000))
        try:
            options.on_retry(retry_state.attempt_number, retry_state.outcome.exception(), next_delay_ms)
        except Exception as e:
            logger.warning(f"on_retry callback failed: {e}")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(options.max_attempts),
        wait=_wait,
        retry=_should_retry,
        before_sleep=_before_sleep,
        sleep=_sleep,
        reraise=True,
    )

    start = time.monotonic()
    attempts = 0
    try:
        async for attempt in retrying:
            with attempt:
                attempts = attempt.retry_state.attempt_number
                data = await operation()
    except Exception as e:
        logger.debug(f"Operation failed after {attempts} attempt(s): {e}")
        return RetryResult(success=False, error=e, attempts=attempts, total_time_ms=_elapsed_ms(start))

    return RetryResult(success=True, data=data, attempts=attempts, total_time_ms=_elapsed_ms(start))
