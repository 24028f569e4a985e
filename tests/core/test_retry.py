"""
Test suite for RetryableOperation.

Covers attempt counting, the exponential backoff schedule, original-error
propagation and argument validation. Sleep is injected so no test waits.

System role: Verification of the shared retry policy
"""

import asyncio
import logging
import time

import pytest

from fairform.core.retry import RetryableOperation


class FlakyOperation:
    """Fails a fixed number of times, then returns a value."""

    def __init__(self, failures: int, result: str = "ok") -> None:
        self.failures = failures
        self.result = result
        self.calls = 0
        self.errors: list[Exception] = []

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            error = RuntimeError(f"failure {self.calls}")
            self.errors.append(error)
            raise error
        return self.result


class TestRetryableOperationInit:
    """Test suite for constructor validation."""

    def test_init_should_reject_zero_attempts(self) -> None:
        """Test max_attempts below 1 is rejected."""
        with pytest.raises(ValueError):
            RetryableOperation(max_attempts=0)

    def test_init_should_reject_negative_delay(self) -> None:
        """Test negative base delay is rejected."""
        with pytest.raises(ValueError):
            RetryableOperation(base_delay_ms=-1)


class TestRetryableOperationExecute:
    """Test suite for RetryableOperation.execute()."""

    @pytest.mark.asyncio
    async def test_execute_should_call_once_and_not_sleep_on_first_success(
        self,
        recording_sleep,
    ) -> None:
        """Test a first-attempt success is invoked once with no backoff."""
        # Arrange
        retry = RetryableOperation(max_attempts=3, base_delay_ms=100, sleep=recording_sleep)
        operation = FlakyOperation(failures=0, result="done")

        # Act
        result = await retry.execute(operation, "noop")

        # Assert
        assert result == "done"
        assert operation.calls == 1
        assert recording_sleep.delays == []

    @pytest.mark.asyncio
    async def test_execute_should_await_coroutine_returned_by_lambda(self, recording_sleep) -> None:
        """Test a plain lambda returning a coroutine has that coroutine run to completion."""
        # Arrange
        retry = RetryableOperation(max_attempts=3, base_delay_ms=0, sleep=recording_sleep)
        calls: list[int] = []

        async def work(value: int) -> bool:
            calls.append(value)
            return False

        # Act
        result = await retry.execute(lambda: work(1), "lambda wrapped")

        # Assert
        assert calls == [1]
        assert result is False

    @pytest.mark.asyncio
    async def test_execute_should_retry_lambda_wrapped_coroutine_failures(
        self,
        recording_sleep,
    ) -> None:
        """Test failures raised inside a lambda-produced coroutine trigger retries."""
        # Arrange
        retry = RetryableOperation(max_attempts=3, base_delay_ms=100, sleep=recording_sleep)
        operation = FlakyOperation(failures=1, result="recovered")

        async def call_operation(op: FlakyOperation) -> str:
            return await op()

        # Act
        result = await retry.execute(lambda: call_operation(operation), "lambda flaky")

        # Assert
        assert result == "recovered"
        assert operation.calls == 2
        assert recording_sleep.delays == pytest.approx([0.1])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_attempts", [1, 2, 3, 5])
    async def test_execute_should_invoke_exactly_max_attempts_when_always_failing(
        self,
        max_attempts: int,
        recording_sleep,
    ) -> None:
        """Test an always-failing operation runs N times and raises the last original error."""
        # Arrange
        retry = RetryableOperation(
            max_attempts=max_attempts,
            base_delay_ms=10,
            sleep=recording_sleep,
        )
        operation = FlakyOperation(failures=max_attempts + 10)

        # Act
        with pytest.raises(RuntimeError) as exc_info:
            await retry.execute(operation, "always fails")

        # Assert
        assert operation.calls == max_attempts
        assert exc_info.value is operation.errors[-1]
        assert len(recording_sleep.delays) == max_attempts - 1

    @pytest.mark.asyncio
    async def test_execute_should_double_delay_after_each_failure(self, recording_sleep) -> None:
        """Test backoff is base, 2*base, 4*base with no jitter."""
        # Arrange
        retry = RetryableOperation(max_attempts=4, base_delay_ms=250, sleep=recording_sleep)
        operation = FlakyOperation(failures=3)

        # Act
        result = await retry.execute(operation, "three failures")

        # Assert
        assert result == "ok"
        assert operation.calls == 4
        assert recording_sleep.delays == pytest.approx([0.25, 0.5, 1.0])

    @pytest.mark.asyncio
    async def test_execute_should_wait_at_least_three_base_delays_for_two_failures(self) -> None:
        """Test real elapsed time for fail, fail, succeed is at least d + 2d."""
        # Arrange
        retry = RetryableOperation(max_attempts=3, base_delay_ms=20, sleep=asyncio.sleep)
        operation = FlakyOperation(failures=2)

        # Act
        start = time.monotonic()
        await retry.execute(operation, "timed")
        elapsed_ms = (time.monotonic() - start) * 1000

        # Assert
        assert operation.calls == 3
        assert elapsed_ms >= 60 * 0.95

    @pytest.mark.asyncio
    async def test_execute_should_not_retry_unlisted_exception_types(self, recording_sleep) -> None:
        """Test exceptions outside retry_on propagate on the first attempt."""
        # Arrange
        retry = RetryableOperation(
            max_attempts=3,
            base_delay_ms=10,
            sleep=recording_sleep,
            retry_on=(ConnectionError,),
        )
        operation = FlakyOperation(failures=5)

        # Act
        with pytest.raises(RuntimeError):
            await retry.execute(operation, "not retryable")

        # Assert
        assert operation.calls == 1
        assert recording_sleep.delays == []

    @pytest.mark.asyncio
    async def test_execute_should_log_warning_per_retry_and_error_on_exhaustion(
        self,
        recording_sleep,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test one warning per non-final failure and one error at the end."""
        # Arrange
        retry = RetryableOperation(max_attempts=3, base_delay_ms=10, sleep=recording_sleep)
        operation = FlakyOperation(failures=3)

        # Act
        with caplog.at_level(logging.WARNING, logger="fairform.core.retry"):
            with pytest.raises(RuntimeError):
                await retry.execute(operation, "archive session")

        # Assert
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(warnings) == 2
        assert len(errors) == 1
        assert "archive session" in errors[0].getMessage()


class TestDelayForAttempt:
    """Test suite for RetryableOperation.delay_for_attempt()."""

    def test_delay_for_attempt_should_follow_power_of_two(self) -> None:
        """Test delay is base * 2^(n-1)."""
        retry = RetryableOperation(base_delay_ms=5000)

        assert [retry.delay_for_attempt(n) for n in (1, 2, 3)] == [5000, 10000, 20000]
