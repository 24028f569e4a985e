"""
Retryable operation with exponential backoff.

Wraps an async unit of work and re-attempts it after transient failures.
The wait before attempt n+1 is base_delay_ms * 2^(n-1) with no jitter, so
a given failure pattern always produces the same schedule.

Dependencies: tenacity
System role: Retry policy shared by batch jobs (session lifecycle)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[Any]]


class RetryableOperation:
    """
    Execute async operations with bounded retries and exponential backoff.

    Holds configuration only; every execute() call is independent.

    Attributes:
        max_attempts: Total attempts including the first one
        base_delay_ms: Delay after the first failed attempt, doubled each retry
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay_ms: int = 1000,
        sleep: SleepFn = asyncio.sleep,
        retry_on: tuple[type[BaseException], ...] = (Exception,),
    ) -> None:
        """
        Initialize retry policy.

        Args:
            max_attempts: Total attempts (1 disables retry)
            base_delay_ms: Base backoff delay in milliseconds
            sleep: Awaitable sleep taking seconds (injectable for tests)
            retry_on: Exception types that trigger a retry

        Raises:
            ValueError: If max_attempts < 1 or base_delay_ms < 0
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative")

        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self._sleep = sleep
        self._retry_on = retry_on

    def delay_for_attempt(self, attempt: int) -> float:
        """
        Backoff delay in milliseconds after the given failed attempt.

        Args:
            attempt: 1-based attempt number that just failed

        Returns:
            float: Delay before the next attempt in milliseconds
        """
        return self.base_delay_ms * (2 ** (attempt - 1))

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_name: str,
    ) -> T:
        """
        Run operation, retrying on failure.

        Args:
            operation: Zero-argument coroutine factory
            operation_name: Label used in log records

        Returns:
            Result of the first successful attempt

        Raises:
            Exception: The last error, unchanged, once all attempts fail
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.base_delay_ms / 1000, exp_base=2, min=0),
            retry=retry_if_exception_type(self._retry_on),
            before_sleep=lambda state: self._log_retry(state, operation_name),
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await operation()
        except self._retry_on as e:
            logger.error(
                f"{operation_name} failed after {self.max_attempts} attempts: {e}",
                extra={
                    "operation": operation_name,
                    "max_attempts": self.max_attempts,
                    "error_type": type(e).__name__,
                },
            )
            raise

    def _log_retry(self, state: RetryCallState, operation_name: str) -> None:
        """Log a non-final failed attempt before backing off."""
        error = state.outcome.exception() if state.outcome else None
        delay_ms = self.delay_for_attempt(state.attempt_number)
        logger.warning(
            f"{operation_name} attempt {state.attempt_number} failed, "
            f"retrying in {delay_ms:.0f}ms: {error}",
            extra={
                "operation": operation_name,
                "attempt": state.attempt_number,
                "delay_ms": delay_ms,
                "error_type": type(error).__name__ if error else None,
            },
        )
