"""
Per-attempt outcome tracking.

AttemptOutcome captures the result of a single attempt inside one
RetryExecutor invocation. It is never persisted or returned to callers.
"""

from dataclasses import dataclass
from typing import Any, Optional

from axonflow.exceptions import AxonFlowError
from axonflow.retry.classifier import Retryability, classify


@dataclass(frozen=True)
class AttemptOutcome:
    """
    Result of one attempt: either a success value or a classified failure.

    Attributes:
        attempt: 1-indexed attempt number
        value: Operation result (success only)
        error: Classified failure (failure only)
    """

    attempt: int
    value: Any = None
    error: Optional[AxonFlowError] = None

    def __post_init__(self) -> None:
        """Validate outcome invariants."""
        if self.attempt < 1:
            raise ValueError("attempt must be >= 1")

    @classmethod
    def success(cls, attempt: int, value: Any) -> "AttemptOutcome":
        return cls(attempt=attempt, value=value)

    @classmethod
    def failure(cls, attempt: int, error: AxonFlowError) -> "AttemptOutcome":
        return cls(attempt=attempt, error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def retryability(self) -> Optional[Retryability]:
        """Classification of the failure, or None for a success."""
        if self.error is None:
            return None
        return classify(self.error.kind, self.error.status_code)

    @property
    def retryable(self) -> bool:
        return self.retryability is Retryability.RETRYABLE
