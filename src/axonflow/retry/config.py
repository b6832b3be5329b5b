"""
Retry configuration.

RetryConfig is built once at client setup and never mutated. Invalid
values fail fast with ConfigurationError so a misconfigured client never
reaches the network.
"""

from dataclasses import dataclass

from axonflow.exceptions import ConfigurationError
from axonflow.retry.backoff import BackoffPolicy

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_DELAY = 1.0  # seconds
DEFAULT_MAX_DELAY = 30.0  # seconds
DEFAULT_MULTIPLIER = 2.0

MAX_ATTEMPTS_LIMIT = 10


@dataclass(frozen=True)
class RetryConfig:
    """
    Immutable retry/backoff settings.

    Attributes:
        enabled: When False the executor runs each operation exactly once
        max_attempts: Total attempts including the first one (1..10)
        initial_delay: Delay before the second attempt, in seconds (> 0)
        max_delay: Upper bound for any single delay, in seconds
        multiplier: Exponential backoff factor (>= 1.0)
    """

    enabled: bool = True
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay: float = DEFAULT_INITIAL_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    multiplier: float = DEFAULT_MULTIPLIER

    def __post_init__(self) -> None:
        """Validate retry invariants."""
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")

        if self.max_attempts > MAX_ATTEMPTS_LIMIT:
            raise ConfigurationError(
                f"max_attempts cannot exceed {MAX_ATTEMPTS_LIMIT}"
            )

        if self.initial_delay <= 0:
            raise ConfigurationError("initial_delay must be positive")

        if self.max_delay < self.initial_delay:
            raise ConfigurationError(
                f"max_delay ({self.max_delay}s) must be >= "
                f"initial_delay ({self.initial_delay}s)"
            )

        if self.multiplier < 1.0:
            raise ConfigurationError("multiplier must be at least 1.0")

    @classmethod
    def defaults(cls) -> "RetryConfig":
        """Default configuration with retries enabled."""
        return cls()

    @classmethod
    def disabled(cls) -> "RetryConfig":
        """Configuration that runs every operation exactly once."""
        return cls(enabled=False)

    def delay_for_attempt(self, attempt: int) -> float:
        """Backoff delay (seconds) after the given 1-indexed attempt."""
        return BackoffPolicy(self).delay(attempt)
