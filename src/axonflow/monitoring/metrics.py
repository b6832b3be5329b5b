"""Prometheus metrics for the AxonFlow SDK resilient-call layer.

These collectors register on the default registry and are exported by
whatever /metrics endpoint the host application exposes. Alert rules
worth configuring:
- axonflow_retry_attempts_total (high retry rate indicates an unstable agent)
- axonflow_retry_exhausted_total (callers are seeing failures)
- axonflow_cache_lookups_total (hit ratio)
"""

from prometheus_client import Counter, Histogram

# === Retry Metrics ===

retry_attempts_total = Counter(
    "axonflow_retry_attempts_total",
    "Total failed attempts that were followed by a retry",
    ["operation"],
)
"""
Retried attempts by operation label.

Labels:
- operation: label passed to RetryExecutor.execute (e.g. executeQuery)
"""

retry_backoff_seconds = Histogram(
    "axonflow_retry_backoff_seconds",
    "Backoff delay applied before a retry, in seconds",
    ["operation"],
    buckets=[0.1, 0.5, 1.0, 2.0, 4.0, 8.0, 16.0, 30.0, 60.0],
)
"""
Backoff delays by operation label.

Buckets follow the default doubling sequence (1s, 2s, 4s, ...) up to the
default 30s cap.
"""

retry_exhausted_total = Counter(
    "axonflow_retry_exhausted_total",
    "Total operations that failed after exhausting all attempts",
    ["operation", "error_kind"],
)
"""
Exhausted retry loops by operation and final error kind.

Labels:
- operation: label passed to RetryExecutor.execute
- error_kind: ErrorKind value of the last failure (connection, timeout, ...)
"""

# === Cache Metrics ===

cache_lookups_total = Counter(
    "axonflow_cache_lookups_total",
    "Total response cache lookups by result",
    ["result"],
)
"""
Cache lookups.

Labels:
- result: hit, miss
"""

cache_evictions_total = Counter(
    "axonflow_cache_evictions_total",
    "Total response cache evictions by reason",
    ["reason"],
)
"""
Cache evictions.

Labels:
- reason: capacity (LRU eviction), expired (TTL elapsed)
"""
