"""Monitoring and metrics instrumentation for the AxonFlow SDK.

Exports Prometheus collectors for retry and cache behaviour.
"""

from axonflow.monitoring.metrics import (
    cache_evictions_total,
    cache_lookups_total,
    retry_attempts_total,
    retry_backoff_seconds,
    retry_exhausted_total,
)

__all__ = [
    "retry_attempts_total",
    "retry_backoff_seconds",
    "retry_exhausted_total",
    "cache_lookups_total",
    "cache_evictions_total",
]
