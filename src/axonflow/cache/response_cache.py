"""
Thread-safe in-memory cache for API responses.

Entries expire a fixed TTL after they are written and the cache never
holds more than ``max_size`` live entries: the least recently used entry
is evicted first. Lookups are type-checked, so a value stored for one
response type is never handed back as another.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import structlog

from axonflow.cache.config import CacheConfig
from axonflow.monitoring.metrics import cache_evictions_total, cache_lookups_total

logger = structlog.get_logger(__name__)

T = TypeVar("T")

CACHE_DISABLED = "Cache disabled"


@dataclass(frozen=True)
class CacheEntry:
    """A cached value with its write time and runtime type."""

    value: Any
    inserted_at: float
    type_tag: type


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time cache counters."""

    hits: int
    misses: int
    evictions: int
    size: int

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def __str__(self) -> str:
        return (
            f"CacheStats{{hits={self.hits}, misses={self.misses}, "
            f"hitRate={self.hit_rate:.2f}, evictions={self.evictions}, "
            f"size={self.size}}}"
        )


class ResponseCache:
    """
    LRU + TTL response cache guarded by a single lock.

    Attributes:
        config: Cache configuration
        enabled: Shortcut for config.enabled
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize response cache.

        Args:
            config: Cache configuration (defaults to CacheConfig.defaults())
            clock: Monotonic time source in seconds
        """
        self.config = config if config is not None else CacheConfig.defaults()
        self.enabled = self.config.enabled
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str, expected_type: type[T]) -> Optional[T]:
        """
        Return the cached value for key if it is live and of expected_type.

        Args:
            key: Cache key (see generate_key)
            expected_type: Type the caller expects; any other type is a miss

        Returns:
            Cached value, or None on miss, expiry, type mismatch, or when
            caching is disabled
        """
        if not self.enabled:
            return None

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_expired(entry):
                del self._entries[key]
                self._evictions += 1
                cache_evictions_total.labels(reason="expired").inc()
                entry = None

            if entry is None or not issubclass(entry.type_tag, expected_type):
                self._misses += 1
                cache_lookups_total.labels(result="miss").inc()
                logger.debug("Cache miss", cache_key=key)
                return None

            self._entries.move_to_end(key)
            self._hits += 1

        cache_lookups_total.labels(result="hit").inc()
        logger.debug("Cache hit", cache_key=key)
        return entry.value

    def put(self, key: str, value: Any) -> None:
        """
        Store value under key. None values and a disabled cache are no-ops.

        Inserting beyond max_size evicts the least recently used entries.
        """
        if not self.enabled or value is None:
            return

        entry = CacheEntry(value=value, inserted_at=self._clock(), type_tag=type(value))
        evicted = 0
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            if len(self._entries) > self.config.max_size:
                self._purge_expired()
            while len(self._entries) > self.config.max_size:
                self._entries.popitem(last=False)
                evicted += 1
            self._evictions += evicted

        if evicted:
            cache_evictions_total.labels(reason="capacity").inc(evicted)
        logger.debug("Cached response", cache_key=key, value_type=entry.type_tag.__name__)

    def invalidate(self, key: str) -> None:
        """Remove a single entry; no-op if absent."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Remove all entries. Counters are kept."""
        with self._lock:
            self._entries.clear()

    def snapshot(self) -> CacheStats:
        """Counters and live entry count; expired entries are purged first."""
        with self._lock:
            self._purge_expired()
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                size=len(self._entries),
            )

    def stats(self) -> str:
        """Human-readable statistics, or "Cache disabled"."""
        if not self.enabled:
            return CACHE_DISABLED
        return str(self.snapshot())

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.inserted_at > self.config.ttl

    def _purge_expired(self) -> None:
        # Caller holds the lock. LRU order is not write order, so scan everything.
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry)]
        for key in expired:
            del self._entries[key]
        if expired:
            self._evictions += len(expired)
            cache_evictions_total.labels(reason="expired").inc(len(expired))

    def __len__(self) -> int:
        """Number of live entries."""
        with self._lock:
            self._purge_expired()
            return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"enabled={self.enabled}, "
            f"ttl={self.config.ttl}s, "
            f"max_size={self.config.max_size})"
        )
