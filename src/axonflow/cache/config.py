"""Response cache configuration."""

from dataclasses import dataclass

from axonflow.exceptions import ConfigurationError

DEFAULT_TTL = 60.0  # seconds
DEFAULT_MAX_SIZE = 1000


@dataclass(frozen=True)
class CacheConfig:
    """
    Immutable response cache settings.

    Attributes:
        enabled: When False, get() always misses and put() is a no-op
        ttl: Maximum entry age in seconds (expire-after-write)
        max_size: Maximum number of live entries
    """

    enabled: bool = True
    ttl: float = DEFAULT_TTL
    max_size: int = DEFAULT_MAX_SIZE

    def __post_init__(self) -> None:
        """Validate cache invariants."""
        if self.ttl < 0:
            raise ConfigurationError("ttl must be non-negative")

        if self.max_size < 1:
            raise ConfigurationError("max_size must be at least 1")

    @classmethod
    def defaults(cls) -> "CacheConfig":
        return cls()

    @classmethod
    def disabled(cls) -> "CacheConfig":
        return cls(enabled=False)
