"""Retry utilities using tenacity for resilient operations."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 2
DEFAULT_INITIAL_WAIT = 1.0  # seconds
DEFAULT_MAX_WAIT = 30.0  # seconds
DEFAULT_JITTER = 0.0  # seconds

SleepFn = Callable[[float], Awaitable[None]]


def backoff_delay(attempt: int, initial_wait: float = DEFAULT_INITIAL_WAIT) -> float:
    """Delay after failed attempt N (1-based): initial * 2^(N-1)."""
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    return initial_wait * 2 ** (attempt - 1)


async def retry_operation(
    operation: Callable[..., Awaitable[T]],
    *args,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    initial_wait: float = DEFAULT_INITIAL_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
    jitter: float = DEFAULT_JITTER,
    retryable_exceptions: tuple[type[BaseException], ...] = (ConnectionError, TimeoutError),
    on_retry: Callable[[int, BaseException, float], None] | None = None,
    sleep: SleepFn = asyncio.sleep,
    **kwargs,
) -> T:
    """Execute an async operation with exponential backoff retry.

    Wait formula after failed attempt N: min(initial * 2^(N-1) + random(0, jitter), max)

    Example timeline with 1s initial and 3 attempts:
        Attempt 1: immediate
        Attempt 2: after 1s
        Attempt 3: after 2s

    Args:
        operation: Async function to execute
        *args: Positional arguments for operation
        max_attempts: Maximum number of attempts (including the first)
        initial_wait: Initial wait time in seconds
        max_wait: Maximum wait time in seconds
        jitter: Upper bound of random extra wait in seconds
        retryable_exceptions: Exception types to retry on
        on_retry: Optional callback called before each backoff sleep with
            (failed attempt number, exception, seconds until next attempt)
        sleep: Async sleep function (injectable for tests)
        **kwargs: Keyword arguments for operation

    Returns:
        Result of the operation

    Raises:
        Exception: The last exception once attempts are exhausted, or the
            first non-retryable exception
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    wait = wait_exponential(multiplier=initial_wait, max=max_wait)
    if jitter > 0:
        wait = wait + wait_random(0, jitter)

    def before_sleep(retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        next_wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"Attempt {retry_state.attempt_number}/{max_attempts} of "
            f"{getattr(operation, '__name__', 'operation')} failed, retrying in {next_wait:.2f}s",
            extra={"error": str(exception)},
        )
        if on_retry and exception is not None:
            on_retry(retry_state.attempt_number, exception, next_wait)

    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait,
        retry=retry_if_exception_type(retryable_exceptions),
        before_sleep=before_sleep,
        sleep=sleep,
        reraise=True,
    ):
        with attempt:
            return await operation(*args, **kwargs)

    # Unreachable: reraise=True raises the last exception
    raise RuntimeError("No attempts made")
