"""
Retrying Connector.

Wraps any connector with exponential-backoff retry. Rate-limit and
generic upstream failures are retried; authentication failures are not.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

from geo_ingestion.domain.value_objects import FetchParams, FetchResponse
from geo_ingestion.interfaces.connector import Connector, ConnectorError
from geo_ingestion.resilience.retry import RetryPolicy, retry_call

logger = logging.getLogger(__name__)


def _is_retryable(error: Exception) -> bool:
    return isinstance(error, ConnectorError) and error.retryable


class RetryingConnector:
    """Connector decorator adding retry with backoff."""

    def __init__(
        self,
        inner: Connector,
        policy: Optional[RetryPolicy] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._inner = inner
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    def fetch_geographic_data(
        self,
        params: FetchParams,
    ) -> Union[FetchResponse, Mapping[str, Any]]:
        return retry_call(
            lambda: self._inner.fetch_geographic_data(params),
            self._policy,
            _is_retryable,
            operation_name=f"fetch from {type(self._inner).__name__}",
            sleep=self._sleep,
        )

    def test_connection(self) -> bool:
        probe = getattr(self._inner, "test_connection", None)
        return bool(probe()) if callable(probe) else True
