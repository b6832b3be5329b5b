"""
Retry executor with exponential backoff.

Every outbound call to the AxonFlow agent goes through RetryExecutor:

1. **Classify**: failures are normalized into the SDK error taxonomy and
   classified as retryable (connection, timeout, rate limit, 5xx) or
   fatal (authentication, policy violation, configuration, anything else)
2. **Short-circuit**: fatal failures are raised immediately
3. **Back off**: retryable failures wait ``min(initial * multiplier^(n-1), max)``
   before the next attempt
4. **Surface**: after the last attempt the last failure is raised as is

Main Components:
    - RetryExecutor: Runs operations (sync and asyncio) with retries
    - RetryConfig: Immutable, validated retry settings
    - BackoffPolicy: Exponential, capped delay computation
    - classify: Pure classifier over (ErrorKind, status_code)
    - RetryHook: Observability protocol (default: Prometheus metrics)

Usage:
    >>> from axonflow.retry import RetryConfig, RetryExecutor
    >>> executor = RetryExecutor(RetryConfig(max_attempts=5))
    >>> result = executor.execute(operation, "executeQuery")
"""

from axonflow.retry.backoff import BackoffPolicy
from axonflow.retry.classifier import (
    Retryability,
    classify,
    is_retryable,
    to_axonflow_error,
)
from axonflow.retry.config import RetryConfig
from axonflow.retry.executor import RetryExecutor
from axonflow.retry.hooks import MetricsRetryHook, RetryHook
from axonflow.retry.outcome import AttemptOutcome

__all__ = [
    "AttemptOutcome",
    "BackoffPolicy",
    "MetricsRetryHook",
    "RetryConfig",
    "RetryExecutor",
    "RetryHook",
    "Retryability",
    "classify",
    "is_retryable",
    "to_axonflow_error",
]
