"""
Connector Protocol.

Defines the abstract interface for external data sources. A connector
fetches one page of geographic records and returns them already in the
canonical geo-object shape.

The connector is responsible for:
    - Serializing outbound requests through its own rate limiter
    - Retrying transient failures with bounded backoff
    - Classifying unresolved failures before surfacing them

Design Notes:
    - The pipeline calls ``fetch_geographic_data`` exactly once per run
    - The pipeline never retries; any raised exception is run-fatal
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from geo_ingestion.domain.value_objects import FetchParams, FetchResponse


class ConnectorErrorCode(str, Enum):
    """Classified upstream failure signals."""

    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    CONNECTOR_FAILURE = "CONNECTOR_FAILURE"


class ConnectorError(Exception):
    """Raised by a connector when a fetch cannot be completed."""

    def __init__(
        self,
        code: ConnectorErrorCode = ConnectorErrorCode.CONNECTOR_FAILURE,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message or code.value)
        self.code = code
        self.message = message or code.value

    @property
    def retryable(self) -> bool:
        return self.code != ConnectorErrorCode.AUTHENTICATION_FAILED


@runtime_checkable
class Connector(Protocol):
    """Abstract interface for an external geographic data source."""

    def fetch_geographic_data(
        self,
        params: FetchParams,
    ) -> Union[FetchResponse, Mapping[str, Any]]:
        """
        Fetch canonical records for the given request parameters.

        Args:
            params: Source-specific parameters (dataset, geography, ...)

        Returns:
            FetchResponse, or a mapping with ``data`` and ``metadata`` keys

        Raises:
            ConnectorError: On a classified, unresolved upstream failure
        """
        ...
