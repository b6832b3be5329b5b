"""
Unit tests for the AxonFlow SDK core.

Test individual components in isolation:
- Error taxonomy and HTTP error mapping
- Error classifier and backoff policy
- Retry executor (sync, async, cancellation, hooks)
- Cache key derivation and response cache
- Call orchestrator and settings
"""
