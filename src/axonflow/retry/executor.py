"""
Retry executor with exponential backoff.

RetryExecutor runs an opaque, zero-argument operation and retries it on
transient failures. Failures are normalized into the SDK error taxonomy
and classified before each decision:

    - success          -> return immediately
    - fatal failure    -> raise immediately, whatever attempts remain
    - retryable, more  -> wait delay(attempt), then try again
    - retryable, last  -> raise the last failure (not a synthetic wrapper)

The executor spawns no threads or tasks. Backoff suspends only the caller:
``execute`` blocks the calling thread, ``execute_async`` suspends the
calling task.

Usage:
    executor = RetryExecutor(RetryConfig(max_attempts=5))
    status = executor.execute(lambda: transport.get("/health"), "healthCheck")
    result = await executor.execute_async(lambda: client.query(req), "executeQuery")
"""

import asyncio
import threading
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from axonflow.exceptions import AxonFlowError, RetryCancelledError
from axonflow.retry.backoff import BackoffPolicy
from axonflow.retry.classifier import to_axonflow_error
from axonflow.retry.config import RetryConfig
from axonflow.retry.hooks import MetricsRetryHook, RetryHook
from axonflow.retry.outcome import AttemptOutcome

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RetryExecutor:
    """
    Executes operations with retry logic and exponential backoff.

    Instances are immutable after construction and safe to share between
    threads and tasks; each call keeps its attempt state on its own stack.

    Attributes:
        config: Retry configuration
        backoff: Backoff policy derived from config
        hook: Observability hook notified of retries and exhaustion
    """

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        hook: Optional[RetryHook] = None,
        sleep: Callable[[float], None] = time.sleep,
        async_sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize retry executor.

        Args:
            config: Retry configuration (defaults to RetryConfig.defaults())
            hook: Observability hook (defaults to Prometheus metrics)
            sleep: Blocking sleep used by execute()
            async_sleep: Coroutine sleep used by execute_async()
        """
        self.config = config if config is not None else RetryConfig.defaults()
        self.backoff = BackoffPolicy(self.config)
        self.hook: RetryHook = hook if hook is not None else MetricsRetryHook()
        self._sleep = sleep
        self._async_sleep = async_sleep

    def execute(
        self,
        operation: Callable[[], T],
        label: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> T:
        """
        Execute an operation, retrying transient failures.

        Args:
            operation: Zero-argument callable performing one attempt
            label: Operation description for logs, metrics and error messages
            cancel_event: Optional event; when set during a backoff delay the
                loop stops with RetryCancelledError

        Returns:
            The operation result

        Raises:
            AxonFlowError: Classified failure (fatal, or last retryable one)
            RetryCancelledError: cancel_event was set while waiting to retry
        """
        if not self.config.enabled:
            return self._unwrap(self._run_attempt(operation, label, 1), label)

        attempt = 0
        while True:
            attempt += 1
            outcome = self._run_attempt(operation, label, attempt)
            if outcome.succeeded:
                return outcome.value

            delay = self._next_delay(outcome, label)
            self._wait(delay, label, outcome, cancel_event)

    async def execute_async(
        self,
        operation: Callable[[], Awaitable[T]],
        label: str,
    ) -> T:
        """
        Async variant of execute().

        Cancelling the calling task during a backoff delay propagates
        asyncio.CancelledError immediately; no further attempts are made.

        Args:
            operation: Zero-argument callable returning an awaitable
            label: Operation description for logs, metrics and error messages

        Returns:
            The operation result

        Raises:
            AxonFlowError: Classified failure (fatal, or last retryable one)
            asyncio.CancelledError: The calling task was cancelled
        """
        if not self.config.enabled:
            outcome = await self._run_attempt_async(operation, label, 1)
            return self._unwrap(outcome, label)

        attempt = 0
        while True:
            attempt += 1
            outcome = await self._run_attempt_async(operation, label, attempt)
            if outcome.succeeded:
                return outcome.value

            delay = self._next_delay(outcome, label)
            try:
                await self._async_sleep(delay)
            except asyncio.CancelledError:
                logger.warning(
                    "Retry cancelled during backoff",
                    operation=label,
                    attempt=outcome.attempt,
                    last_error=str(outcome.error),
                )
                raise

    @staticmethod
    def _run_attempt(
        operation: Callable[[], T], label: str, attempt: int
    ) -> AttemptOutcome:
        try:
            return AttemptOutcome.success(attempt, operation())
        except Exception as e:
            return AttemptOutcome.failure(attempt, to_axonflow_error(e, label))

    @staticmethod
    async def _run_attempt_async(
        operation: Callable[[], Awaitable[T]], label: str, attempt: int
    ) -> AttemptOutcome:
        try:
            return AttemptOutcome.success(attempt, await operation())
        except Exception as e:
            return AttemptOutcome.failure(attempt, to_axonflow_error(e, label))

    @staticmethod
    def _unwrap(outcome: AttemptOutcome, label: str) -> Any:
        """Return the value of a single (retry disabled) attempt or raise its error."""
        if outcome.succeeded:
            return outcome.value

        logger.debug(
            "Operation failed with retries disabled",
            operation=label,
            error_kind=outcome.error.kind.value,
        )
        raise outcome.error

    def _next_delay(self, outcome: AttemptOutcome, label: str) -> float:
        """
        Decide what follows a failed attempt.

        Returns:
            Backoff delay in seconds before the next attempt

        Raises:
            AxonFlowError: The attempt's failure, when it is fatal or when
                no attempts remain
        """
        error: AxonFlowError = outcome.error
        max_attempts = self.config.max_attempts

        if not outcome.retryable:
            logger.info(
                "Non-retryable failure, not retrying",
                operation=label,
                attempt=outcome.attempt,
                error_kind=error.kind.value,
                status_code=error.status_code,
            )
            raise error

        if outcome.attempt >= max_attempts:
            logger.error(
                f"All {max_attempts} attempts failed for {label}",
                operation=label,
                attempts=outcome.attempt,
                error_kind=error.kind.value,
                status_code=error.status_code,
            )
            self._notify("on_exhausted", label, outcome.attempt, error)
            raise error

        delay = self.backoff.delay(outcome.attempt)
        logger.warning(
            f"Attempt {outcome.attempt}/{max_attempts} failed for {label}, "
            f"retrying in {delay:.3f}s",
            operation=label,
            attempt=outcome.attempt,
            max_attempts=max_attempts,
            delay_seconds=delay,
            error=error.message,
            error_kind=error.kind.value,
        )
        self._notify("on_retry", label, outcome.attempt, max_attempts, delay, error)
        return delay

    def _wait(
        self,
        delay: float,
        label: str,
        outcome: AttemptOutcome,
        cancel_event: Optional[threading.Event],
    ) -> None:
        if cancel_event is None:
            self._sleep(delay)
            return

        if cancel_event.wait(delay):
            logger.warning(
                "Retry cancelled during backoff",
                operation=label,
                attempt=outcome.attempt,
                last_error=str(outcome.error),
            )
            raise RetryCancelledError(f"Retry interrupted: {label}") from outcome.error

    def _notify(self, hook_event: str, *args: Any) -> None:
        try:
            getattr(self.hook, hook_event)(*args)
        except Exception:
            logger.warning(
                "Retry hook raised, ignoring",
                hook=type(self.hook).__name__,
                hook_event=hook_event,
                exc_info=True,
            )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"enabled={self.config.enabled}, "
            f"max_attempts={self.config.max_attempts}, "
            f"backoff={self.backoff!r})"
        )
