"""
Failure classification for the retry executor.

``classify`` is a pure function over (ErrorKind, status_code). It fails
closed: anything not explicitly known to be transient is FATAL, so logic
errors never end up in a retry loop.

``to_axonflow_error`` normalizes whatever an operation raised into the
SDK error taxonomy before classification.
"""

from enum import Enum
from typing import Optional

import httpx

from axonflow.exceptions import (
    AxonFlowError,
    APIConnectionError,
    APITimeoutError,
    ErrorKind,
)
from axonflow.http_errors import error_from_response


class Retryability(str, Enum):
    RETRYABLE = "retryable"
    FATAL = "fatal"


FATAL_KINDS = frozenset(
    {ErrorKind.AUTHENTICATION, ErrorKind.POLICY_VIOLATION, ErrorKind.CONFIGURATION}
)
TRANSIENT_KINDS = frozenset({ErrorKind.CONNECTION, ErrorKind.TIMEOUT})


def classify(kind: ErrorKind, status_code: Optional[int] = None) -> Retryability:
    """
    Classify a failure as RETRYABLE or FATAL.

    Priority order:
        1. Authentication, policy violation, configuration -> FATAL
        2. Connection, timeout -> RETRYABLE
        3. Rate limit -> RETRYABLE
        4. Status in [500, 600) -> RETRYABLE
        5. Anything else -> FATAL
    """
    if kind in FATAL_KINDS:
        return Retryability.FATAL

    if kind in TRANSIENT_KINDS:
        return Retryability.RETRYABLE

    if kind is ErrorKind.RATE_LIMIT:
        return Retryability.RETRYABLE

    if status_code is not None and 500 <= status_code < 600:
        return Retryability.RETRYABLE

    return Retryability.FATAL


def is_retryable(error: AxonFlowError) -> bool:
    return classify(error.kind, error.status_code) is Retryability.RETRYABLE


def to_axonflow_error(exc: BaseException, label: str) -> AxonFlowError:
    """
    Map an exception raised by an operation into the SDK taxonomy.

    AxonFlowError instances are returned unchanged. httpx.HTTPStatusError
    is mapped by its response status (see error_from_response). Timeouts and
    transport failures become APITimeoutError / APIConnectionError; anything
    else is wrapped as a generic AxonFlowError. The original exception is
    chained as ``__cause__`` of every new error.

    Args:
        exc: Exception raised by the operation
        label: Operation label, used in the error message

    Returns:
        Classified AxonFlowError
    """
    if isinstance(exc, AxonFlowError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        error: AxonFlowError = error_from_response(
            response.status_code, response.text, response.reason_phrase
        )
    # httpx timeouts are TransportErrors too, so they are checked first
    elif isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        error = APITimeoutError(f"Request timed out: {label}")
    elif isinstance(exc, (httpx.TransportError, OSError)):
        error = APIConnectionError(f"Connection failed: {label}")
    else:
        error = AxonFlowError(f"Operation failed: {label}")

    error.__cause__ = exc
    return error
