"""
Configuration settings for the AxonFlow SDK.

All settings are loaded from AXONFLOW_* environment variables with
sensible defaults. Use a .env file for local development.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from axonflow.cache.config import CacheConfig
from axonflow.retry.config import RetryConfig


class Settings(BaseSettings):
    """SDK settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AXONFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches to JSON logs

    # === Retry & Backoff ===
    RETRY_ENABLED: bool = True
    RETRY_MAX_ATTEMPTS: int = 3  # 1..10
    RETRY_INITIAL_DELAY: float = 1.0  # seconds
    RETRY_MAX_DELAY: float = 30.0  # seconds
    RETRY_MULTIPLIER: float = 2.0

    # === Response Cache ===
    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: float = 60.0  # seconds
    CACHE_MAX_SIZE: int = 1000

    def retry_config(self) -> RetryConfig:
        """Build the immutable RetryConfig (raises ConfigurationError if invalid)."""
        return RetryConfig(
            enabled=self.RETRY_ENABLED,
            max_attempts=self.RETRY_MAX_ATTEMPTS,
            initial_delay=self.RETRY_INITIAL_DELAY,
            max_delay=self.RETRY_MAX_DELAY,
            multiplier=self.RETRY_MULTIPLIER,
        )

    def cache_config(self) -> CacheConfig:
        """Build the immutable CacheConfig (raises ConfigurationError if invalid)."""
        return CacheConfig(
            enabled=self.CACHE_ENABLED,
            ttl=self.CACHE_TTL_SECONDS,
            max_size=self.CACHE_MAX_SIZE,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance loaded from the environment on first call
    """
    return Settings()
