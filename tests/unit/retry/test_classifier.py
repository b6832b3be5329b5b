"""
Unit tests for failure classification and exception normalization.
"""

import httpx
import pytest

from axonflow.exceptions import (
    APIConnectionError,
    APITimeoutError,
    AuthenticationError,
    AxonFlowError,
    ConfigurationError,
    ErrorKind,
    PolicyViolationError,
    RateLimitError,
    RetryCancelledError,
)
from axonflow.retry.classifier import (
    Retryability,
    classify,
    is_retryable,
    to_axonflow_error,
)


# ============================================================================
# classify()
# ============================================================================


@pytest.mark.parametrize(
    "kind",
    [ErrorKind.AUTHENTICATION, ErrorKind.POLICY_VIOLATION, ErrorKind.CONFIGURATION],
)
def test_caller_errors_are_fatal(kind):
    assert classify(kind) is Retryability.FATAL


@pytest.mark.parametrize(
    "kind",
    [ErrorKind.AUTHENTICATION, ErrorKind.POLICY_VIOLATION, ErrorKind.CONFIGURATION],
)
def test_fatal_kinds_win_over_server_status(kind):
    """Test fatal kinds stay fatal even when carrying a 5xx status."""
    assert classify(kind, 503) is Retryability.FATAL


@pytest.mark.parametrize(
    "kind", [ErrorKind.CONNECTION, ErrorKind.TIMEOUT, ErrorKind.RATE_LIMIT]
)
def test_transient_kinds_are_retryable(kind):
    assert classify(kind) is Retryability.RETRYABLE


@pytest.mark.parametrize("status", [500, 502, 503, 504, 599])
def test_server_status_is_retryable(status):
    assert classify(ErrorKind.GENERIC, status) is Retryability.RETRYABLE


@pytest.mark.parametrize("status", [None, 0, 400, 404, 422, 499, 600])
def test_unclassified_failures_fail_closed(status):
    """Test unknown failures default to FATAL so logic errors are not retried."""
    assert classify(ErrorKind.GENERIC, status) is Retryability.FATAL


def test_cancelled_is_fatal():
    assert classify(ErrorKind.CANCELLED) is Retryability.FATAL


def test_is_retryable_reads_kind_and_status():
    assert is_retryable(APIConnectionError("down")) is True
    assert is_retryable(RateLimitError("slow down")) is True
    assert is_retryable(AxonFlowError("boom", status_code=502)) is True
    assert is_retryable(AxonFlowError("bad request", status_code=400)) is False
    assert is_retryable(AuthenticationError("nope")) is False
    assert is_retryable(PolicyViolationError("blocked")) is False
    assert is_retryable(ConfigurationError("bad url")) is False
    assert is_retryable(RetryCancelledError()) is False


def test_classification_uses_kind_not_class():
    """Test a base AxonFlowError tagged as CONNECTION is retryable."""
    error = AxonFlowError("socket closed", kind=ErrorKind.CONNECTION)

    assert is_retryable(error) is True


# ============================================================================
# to_axonflow_error()
# ============================================================================


def test_sdk_errors_pass_through_unchanged():
    original = AuthenticationError("invalid license key")

    assert to_axonflow_error(original, "healthCheck") is original


def test_httpx_timeout_becomes_timeout_error():
    cause = httpx.ReadTimeout("read timed out")

    error = to_axonflow_error(cause, "executeQuery")

    assert isinstance(error, APITimeoutError)
    assert error.kind is ErrorKind.TIMEOUT
    assert error.message == "Request timed out: executeQuery"
    assert error.__cause__ is cause


def test_builtin_timeout_becomes_timeout_error():
    error = to_axonflow_error(TimeoutError("timed out"), "auditLLMCall")

    assert error.kind is ErrorKind.TIMEOUT


def test_httpx_connect_error_becomes_connection_error():
    cause = httpx.ConnectError("connection refused")

    error = to_axonflow_error(cause, "executeQuery")

    assert isinstance(error, APIConnectionError)
    assert error.message == "Connection failed: executeQuery"
    assert error.__cause__ is cause


def test_os_error_becomes_connection_error():
    error = to_axonflow_error(ConnectionResetError("reset by peer"), "preCheck")

    assert error.kind is ErrorKind.CONNECTION


def test_unknown_exception_is_wrapped_generically_with_cause():
    cause = ValueError("unexpected payload")

    error = to_axonflow_error(cause, "generatePlan")

    assert type(error) is AxonFlowError
    assert error.kind is ErrorKind.GENERIC
    assert error.error_code == "UNCLASSIFIED"
    assert error.message == "Operation failed: generatePlan"
    assert error.__cause__ is cause
    assert is_retryable(error) is False


def httpx_status_error(status_code, **kwargs):
    """Build a response for status_code and return httpx's own HTTPStatusError."""
    request = httpx.Request("POST", "http://agent.test/api/request")
    response = httpx.Response(status_code, request=request, **kwargs)
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        response.raise_for_status()
    return exc_info.value


@pytest.mark.parametrize("status", [500, 502, 503])
def test_httpx_server_status_error_keeps_status_and_is_retryable(status):
    cause = httpx_status_error(status)

    error = to_axonflow_error(cause, "executeQuery")

    assert error.kind is ErrorKind.GENERIC
    assert error.status_code == status
    assert error.__cause__ is cause
    assert is_retryable(error) is True


def test_httpx_401_status_error_becomes_authentication_error():
    cause = httpx_status_error(401, json={"error": "invalid license key"})

    error = to_axonflow_error(cause, "executeQuery")

    assert isinstance(error, AuthenticationError)
    assert error.message == "invalid license key"
    assert is_retryable(error) is False


def test_httpx_404_status_error_stays_fatal_with_status():
    error = to_axonflow_error(httpx_status_error(404), "getPlanStatus")

    assert error.status_code == 404
    assert is_retryable(error) is False


def test_httpx_429_status_error_becomes_rate_limit():
    error = to_axonflow_error(httpx_status_error(429), "executeQuery")

    assert isinstance(error, RateLimitError)
    assert is_retryable(error) is True
