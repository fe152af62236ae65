"""
Resilience Package - Retry for Upstream Calls.

Connectors retry transient upstream failures themselves; the pipeline
never retries a fetch.
"""

from geo_ingestion.resilience.retry import RetryPolicy, retry_call

__all__ = ["RetryPolicy", "retry_call"]
