"""
AxonFlow SDK: resilient-call core for the AxonFlow AI-governance agent.

Mediates every outbound call between an application and the AxonFlow
agent:
- Failure classification into a closed error taxonomy
- Retries with capped exponential backoff (sync and asyncio)
- Type-safe, TTL-bounded response caching for idempotent requests

Architecture: CallOrchestrator -> ResponseCache -> RetryExecutor -> operation
"""

from axonflow.cache import CacheConfig, ResponseCache, generate_key
from axonflow.config import Settings, get_settings
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
from axonflow.orchestrator import CallOrchestrator
from axonflow.retry import RetryConfig, RetryExecutor

__version__ = "0.1.0"

__all__ = [
    "APIConnectionError",
    "APITimeoutError",
    "AuthenticationError",
    "AxonFlowError",
    "CacheConfig",
    "CallOrchestrator",
    "ConfigurationError",
    "ErrorKind",
    "PolicyViolationError",
    "RateLimitError",
    "ResponseCache",
    "RetryCancelledError",
    "RetryConfig",
    "RetryExecutor",
    "Settings",
    "generate_key",
    "get_settings",
]
