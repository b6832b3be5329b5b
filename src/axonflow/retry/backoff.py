"""
Exponential backoff policy.

    delay(n) = min(initial_delay * multiplier ** (n - 1), max_delay)

The sequence is non-decreasing and saturates at max_delay: once clamped
it stays clamped for every later attempt.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from axonflow.retry.config import RetryConfig


class BackoffPolicy:
    """Computes the delay before the next attempt from a RetryConfig."""

    def __init__(self, config: "RetryConfig"):
        self.initial_delay = config.initial_delay
        self.max_delay = config.max_delay
        self.multiplier = config.multiplier

    def delay(self, attempt: int) -> float:
        """
        Delay in seconds after the given attempt.

        Args:
            attempt: 1-indexed number of the attempt that just failed

        Returns:
            Seconds to wait; attempt 1 (or lower) returns initial_delay as is
        """
        if attempt <= 1:
            return self.initial_delay

        try:
            raw = self.initial_delay * self.multiplier ** (attempt - 1)
        except OverflowError:
            return self.max_delay

        return min(raw, self.max_delay)

    def __repr__(self) -> str:
        return (
            f"BackoffPolicy(initial_delay={self.initial_delay}s, "
            f"multiplier={self.multiplier}, max_delay={self.max_delay}s)"
        )
