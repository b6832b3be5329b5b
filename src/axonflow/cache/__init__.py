"""
In-memory response cache.

Main Components:
    - ResponseCache: Thread-safe LRU + TTL cache with type-checked lookups
    - CacheConfig: Immutable, validated cache settings
    - generate_key: Stable key derivation from request attributes
"""

from axonflow.cache.config import CacheConfig
from axonflow.cache.keys import generate_key
from axonflow.cache.response_cache import (
    CACHE_DISABLED,
    CacheEntry,
    CacheStats,
    ResponseCache,
)

__all__ = [
    "CACHE_DISABLED",
    "CacheConfig",
    "CacheEntry",
    "CacheStats",
    "ResponseCache",
    "generate_key",
]
