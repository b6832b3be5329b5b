"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from axonflow.cache.config import CacheConfig
from axonflow.cache.response_cache import ResponseCache
from axonflow.config import Settings
from axonflow.retry.config import RetryConfig
from axonflow.retry.executor import RetryExecutor


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class RecordingAsyncSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class RecordingHook:
    """RetryHook that records every notification."""

    def __init__(self):
        self.retries: list[tuple] = []
        self.exhausted: list[tuple] = []

    def on_retry(self, label, attempt, max_attempts, delay, error) -> None:
        self.retries.append((label, attempt, max_attempts, delay, error))

    def on_exhausted(self, label, attempts, error) -> None:
        self.exhausted.append((label, attempts, error))


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with fast retries and a small cache.

    Built without reading a .env file so local developer settings never
    leak into tests.
    """
    return Settings(
        _env_file=None,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        RETRY_ENABLED=True,
        RETRY_MAX_ATTEMPTS=3,
        RETRY_INITIAL_DELAY=0.01,
        RETRY_MAX_DELAY=0.05,
        RETRY_MULTIPLIER=2.0,
        CACHE_ENABLED=True,
        CACHE_TTL_SECONDS=60.0,
        CACHE_MAX_SIZE=10,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def recording_async_sleep() -> RecordingAsyncSleep:
    return RecordingAsyncSleep()


@pytest.fixture
def recording_hook() -> RecordingHook:
    return RecordingHook()


@pytest.fixture
def retry_config() -> RetryConfig:
    """Default-shaped retry config: 3 attempts, 1s initial, x2, 30s cap."""
    return RetryConfig(max_attempts=3, initial_delay=1.0, max_delay=30.0, multiplier=2.0)


@pytest.fixture
def executor(retry_config, recording_sleep, recording_async_sleep, recording_hook) -> RetryExecutor:
    """RetryExecutor that never really sleeps."""
    return RetryExecutor(
        retry_config,
        hook=recording_hook,
        sleep=recording_sleep,
        async_sleep=recording_async_sleep,
    )


@pytest.fixture
def cache(fake_clock) -> ResponseCache:
    return ResponseCache(CacheConfig(ttl=60.0, max_size=3), clock=fake_clock)
