"""
Error taxonomy for the AxonFlow SDK.

Every failure surfaced to callers is an AxonFlowError tagged with an
ErrorKind. The retry classifier only looks at the kind and the optional
HTTP status, never at the concrete class, so the subclasses below exist
purely for caller convenience (``except AuthenticationError``) and to
carry kind-specific details.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds understood by the retry classifier."""

    AUTHENTICATION = "authentication"
    POLICY_VIOLATION = "policy_violation"
    CONFIGURATION = "configuration"
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"
    GENERIC = "generic"
    CANCELLED = "cancelled"


DEFAULT_ERROR_CODES: dict[ErrorKind, str] = {
    ErrorKind.AUTHENTICATION: "AUTHENTICATION_FAILED",
    ErrorKind.POLICY_VIOLATION: "POLICY_VIOLATION",
    ErrorKind.CONFIGURATION: "CONFIGURATION_ERROR",
    ErrorKind.CONNECTION: "CONNECTION_FAILED",
    ErrorKind.TIMEOUT: "TIMEOUT",
    ErrorKind.RATE_LIMIT: "RATE_LIMIT_EXCEEDED",
    ErrorKind.GENERIC: "UNCLASSIFIED",
    ErrorKind.CANCELLED: "RETRY_CANCELLED",
}


class AxonFlowError(Exception):
    """
    Base exception for all SDK errors.

    Attributes:
        message: Human-readable error message
        kind: Failure kind used for retry classification
        status_code: HTTP-like status code, if the failure carried one
        error_code: Machine-readable error code
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind = ErrorKind.GENERIC,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.error_code = error_code or DEFAULT_ERROR_CODES[kind]

    def __str__(self) -> str:
        text = f"{type(self).__name__}: {self.message}"
        if self.status_code:
            text += f" (status={self.status_code})"
        if self.error_code:
            text += f" [{self.error_code}]"
        return text

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"message={self.message!r}, "
            f"kind={self.kind.value}, "
            f"status_code={self.status_code})"
        )


class AuthenticationError(AxonFlowError):
    """Raised when credentials are missing, invalid, or lack permission."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(
            message, kind=ErrorKind.AUTHENTICATION, status_code=status_code
        )


class PolicyViolationError(AxonFlowError):
    """
    Raised when the governance service blocks a request by policy.

    Attributes:
        block_reason: Detailed reason the request was blocked
        policy_name: Name of the blocking policy (extracted from the
            block reason when not given explicitly)
        policies_evaluated: Names of all policies evaluated for the request
    """

    def __init__(
        self,
        block_reason: Optional[str],
        policy_name: Optional[str] = None,
        policies_evaluated: Optional[list[str]] = None,
    ):
        super().__init__(
            f"Request blocked by policy: {policy_name or block_reason}",
            kind=ErrorKind.POLICY_VIOLATION,
            status_code=403,
        )
        self.block_reason = block_reason
        self.policy_name = policy_name or extract_policy_name(block_reason)
        self.policies_evaluated = tuple(policies_evaluated or ())


def extract_policy_name(block_reason: Optional[str]) -> str:
    """
    Extract a policy name from a block reason string.

    Handles "Request blocked by policy: name", "Blocked by policy: name"
    and "[name] description"; anything else is returned unchanged.
    """
    if not block_reason:
        return "unknown"

    for prefix in ("Request blocked by policy: ", "Blocked by policy: "):
        if block_reason.startswith(prefix):
            return block_reason[len(prefix):].strip()

    if block_reason.startswith("["):
        end = block_reason.find("]")
        if end > 1:
            return block_reason[1:end].strip()

    return block_reason


class ConfigurationError(AxonFlowError):
    """Raised when SDK configuration is invalid. Never retried."""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.CONFIGURATION)


class APIConnectionError(AxonFlowError):
    """Raised when the governance service cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message, kind=ErrorKind.CONNECTION, status_code=status_code
        )


class APITimeoutError(AxonFlowError):
    """
    Raised when a request exceeds its timeout.

    Attributes:
        timeout: Configured timeout in seconds, if known
    """

    def __init__(
        self,
        message: str,
        timeout: Optional[float] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, kind=ErrorKind.TIMEOUT, status_code=status_code)
        self.timeout = timeout


class RateLimitError(AxonFlowError):
    """
    Raised when the governance service rate-limits the caller.

    Attributes:
        limit: Maximum requests allowed in the window (0 if unknown)
        remaining: Requests remaining in the window (0 if unknown)
        reset_at: When the window resets, if known
    """

    def __init__(
        self,
        message: str,
        limit: int = 0,
        remaining: int = 0,
        reset_at: Optional[datetime] = None,
    ):
        super().__init__(message, kind=ErrorKind.RATE_LIMIT, status_code=429)
        self.limit = limit
        self.remaining = remaining
        self.reset_at = reset_at

    @property
    def retry_after(self) -> float:
        """Seconds until the rate limit resets, never negative."""
        if self.reset_at is None:
            return 0.0
        remaining = (self.reset_at - datetime.now(timezone.utc)).total_seconds()
        return max(remaining, 0.0)


class RetryCancelledError(AxonFlowError):
    """Raised when the caller cancels a retry loop during a backoff delay."""

    def __init__(self, message: str = "Retry interrupted"):
        super().__init__(message, kind=ErrorKind.CANCELLED)
