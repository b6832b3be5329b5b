"""
Observability hooks for the retry executor.

A hook is notified when a failed attempt is about to be retried and when
an operation exhausts its attempts. Hooks are advisory: the executor
logs and ignores any exception a hook raises.
"""

from typing import Protocol

from axonflow.exceptions import AxonFlowError
from axonflow.monitoring.metrics import (
    retry_attempts_total,
    retry_backoff_seconds,
    retry_exhausted_total,
)


class RetryHook(Protocol):
    """Receives retry lifecycle notifications from RetryExecutor."""

    def on_retry(
        self,
        label: str,
        attempt: int,
        max_attempts: int,
        delay: float,
        error: AxonFlowError,
    ) -> None:
        """
        Called after a retryable failure, before the backoff delay.

        Args:
            label: Operation label
            attempt: Number of the attempt that failed (1-indexed)
            max_attempts: Configured attempt limit
            delay: Seconds the executor will wait before the next attempt
            error: Classified failure of the attempt
        """
        ...

    def on_exhausted(self, label: str, attempts: int, error: AxonFlowError) -> None:
        """Called once when the last allowed attempt fails with a retryable error."""
        ...


class MetricsRetryHook:
    """Default hook: records retries and exhaustion in Prometheus."""

    def on_retry(
        self,
        label: str,
        attempt: int,
        max_attempts: int,
        delay: float,
        error: AxonFlowError,
    ) -> None:
        retry_attempts_total.labels(operation=label).inc()
        retry_backoff_seconds.labels(operation=label).observe(delay)

    def on_exhausted(self, label: str, attempts: int, error: AxonFlowError) -> None:
        retry_exhausted_total.labels(operation=label, error_kind=error.kind.value).inc()
