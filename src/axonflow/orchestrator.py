"""
Call orchestrator: the application-facing entry point of the SDK core.

For a cacheable call the orchestrator derives a cache key, returns a live
cached value without touching the operation at all, and otherwise runs
the operation through the RetryExecutor and caches the successful result.

Usage:
    orchestrator = CallOrchestrator.from_settings(get_settings())
    response = orchestrator.call(
        lambda: transport.post("/api/request", request),
        label="executeQuery",
        request_kind=request.request_type,
        query=request.query,
        identifier=request.user_token,
        expected_type=ClientResponse,
        cache_if=lambda r: r.success and not r.blocked,
    )
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from axonflow.cache.keys import generate_key
from axonflow.cache.response_cache import ResponseCache
from axonflow.config import Settings
from axonflow.retry.executor import RetryExecutor
from axonflow.retry.hooks import RetryHook

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CallOrchestrator:
    """
    Composes cache lookup, retrying execution and cache population.

    Attributes:
        retry_executor: Executor used for every outbound operation
        cache: Response cache for idempotent calls
    """

    def __init__(self, retry_executor: RetryExecutor, cache: ResponseCache):
        self.retry_executor = retry_executor
        self.cache = cache

        logger.info(
            "CallOrchestrator initialized",
            retry_enabled=retry_executor.config.enabled,
            max_attempts=retry_executor.config.max_attempts,
            cache_enabled=cache.enabled,
            cache_ttl_seconds=cache.config.ttl,
            cache_max_size=cache.config.max_size,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, hook: Optional[RetryHook] = None
    ) -> "CallOrchestrator":
        """
        Build an orchestrator from SDK settings.

        Raises:
            ConfigurationError: Retry or cache settings are invalid
        """
        return cls(
            RetryExecutor(settings.retry_config(), hook=hook),
            ResponseCache(settings.cache_config()),
        )

    generate_key = staticmethod(generate_key)

    def call(
        self,
        operation: Callable[[], T],
        *,
        label: str,
        request_kind: Optional[str],
        query: Optional[str],
        identifier: Optional[str],
        expected_type: type[T],
        cache_if: Optional[Callable[[T], bool]] = None,
    ) -> T:
        """
        Run a cacheable operation.

        Args:
            operation: Zero-argument callable performing one attempt
            label: Operation description for logs and errors
            request_kind: Request type, part of the cache key
            query: Query text, part of the cache key
            identifier: User identifier, part of the cache key
            expected_type: Type of the result; cached values of any other
                type are ignored
            cache_if: Predicate deciding whether a result may be cached
                (default: every non-None result)

        Returns:
            Cached or freshly fetched result

        Raises:
            AxonFlowError: Classified failure from the retry executor
        """
        key = generate_key(request_kind, query, identifier)
        cached = self.cache.get(key, expected_type)
        if cached is not None:
            logger.debug("Serving cached response", operation=label, cache_key=key)
            return cached

        result = self.retry_executor.execute(operation, label)
        self._store(key, result, cache_if)
        return result

    async def call_async(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        label: str,
        request_kind: Optional[str],
        query: Optional[str],
        identifier: Optional[str],
        expected_type: type[T],
        cache_if: Optional[Callable[[T], bool]] = None,
    ) -> T:
        """Async variant of call(); see call() for arguments."""
        key = generate_key(request_kind, query, identifier)
        cached = self.cache.get(key, expected_type)
        if cached is not None:
            logger.debug("Serving cached response", operation=label, cache_key=key)
            return cached

        result = await self.retry_executor.execute_async(operation, label)
        self._store(key, result, cache_if)
        return result

    def execute(self, operation: Callable[[], T], label: str) -> T:
        """Run a non-cacheable operation through the retry executor."""
        return self.retry_executor.execute(operation, label)

    async def execute_async(self, operation: Callable[[], Awaitable[T]], label: str) -> T:
        """Run a non-cacheable async operation through the retry executor."""
        return await self.retry_executor.execute_async(operation, label)

    def _store(
        self, key: str, result: Any, cache_if: Optional[Callable[[Any], bool]]
    ) -> None:
        if cache_if is not None and not cache_if(result):
            return
        self.cache.put(key, result)

    # === Cache management ===

    def cache_get(self, key: str, expected_type: type[T]) -> Optional[T]:
        return self.cache.get(key, expected_type)

    def cache_put(self, key: str, value: Any) -> None:
        self.cache.put(key, value)

    def cache_invalidate(self, key: str) -> None:
        self.cache.invalidate(key)

    def cache_clear(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> str:
        return self.cache.stats()

    def close(self) -> None:
        """Drop all cached responses."""
        self.cache.clear()
        logger.info("CallOrchestrator closed")

    def __enter__(self) -> "CallOrchestrator":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
