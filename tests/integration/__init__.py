"""
Integration tests for the AxonFlow SDK core.

Run the orchestrator over real httpx clients backed by httpx.MockTransport,
so no external service is needed. Marked with @pytest.mark.integration.
"""
