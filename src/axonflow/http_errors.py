"""
HTTP error response mapping.

Translates a non-2xx response produced by the caller's transport into the
SDK error taxonomy so the retry classifier can act on it:

    401          -> AuthenticationError
    403          -> PolicyViolationError if the body mentions a policy block,
                    AuthenticationError(403) otherwise
    429          -> RateLimitError
    408, 504     -> APITimeoutError
    other >= 400 -> AxonFlowError carrying the status (5xx stay retryable)
"""

import json
from typing import Optional

import httpx

from axonflow.exceptions import (
    AuthenticationError,
    AxonFlowError,
    APITimeoutError,
    PolicyViolationError,
    RateLimitError,
)

MESSAGE_KEYS = ("error", "message", "block_reason")
MAX_RAW_BODY_MESSAGE = 200


def extract_error_message(body: Optional[str], default_message: str) -> str:
    """
    Pull a human-readable message out of an error body.

    JSON bodies use the first of "error", "message", "block_reason";
    short non-JSON bodies are returned as is.
    """
    if not body:
        return default_message

    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return body if len(body) < MAX_RAW_BODY_MESSAGE else default_message

    if isinstance(payload, dict):
        for key in MESSAGE_KEYS:
            if key in payload:
                return str(payload[key])

    return default_message


def error_from_response(
    status_code: int, body: Optional[str] = None, reason: str = ""
) -> AxonFlowError:
    """
    Build the classified error for an HTTP error response.

    Args:
        status_code: HTTP status code (>= 400)
        body: Raw response body, if any
        reason: HTTP reason phrase, used when the body has no message

    Returns:
        AxonFlowError subclass matching the status
    """
    message = extract_error_message(body, reason or f"HTTP {status_code}")
    text = (body or "").lower()

    if status_code == 401:
        return AuthenticationError(message)
    if status_code == 403:
        if "policy" in text or "blocked" in text:
            return PolicyViolationError(message)
        return AuthenticationError(message, status_code=403)
    if status_code == 429:
        return RateLimitError(message)
    if status_code in (408, 504):
        return APITimeoutError(message, status_code=status_code)
    return AxonFlowError(message, status_code=status_code)


def raise_for_status(response: httpx.Response) -> httpx.Response:
    """
    Raise the classified AxonFlowError for an unsuccessful httpx response.

    Returns:
        The response unchanged when it is successful, for chaining
    """
    if response.is_success:
        return response

    raise error_from_response(
        response.status_code, response.text, response.reason_phrase
    )
