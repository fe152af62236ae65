"""
Interfaces Layer - Abstract Protocols for Collaborators.

This package defines the abstract interfaces (using typing.Protocol) for
everything the ingestion core depends on but does not own. High-level
modules depend on these abstractions, not on concrete implementations.

Protocols:
    - Connector: Fetch contract of an external data source
    - AuditSink: Fire-and-forget audit event emission
    - MetricsCollector: Performance metrics abstraction
"""

from geo_ingestion.interfaces.audit_sink import AuditSink, safe_emit
from geo_ingestion.interfaces.connector import (
    Connector,
    ConnectorError,
    ConnectorErrorCode,
)
from geo_ingestion.interfaces.metrics_collector import MetricsCollector

__all__ = [
    "AuditSink",
    "Connector",
    "ConnectorError",
    "ConnectorErrorCode",
    "MetricsCollector",
    "safe_emit",
]
