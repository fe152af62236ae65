"""
Adapters Package - Concrete Implementations.

This package contains concrete implementations of the interfaces:
    - MockCensusConnector / RetryingConnector: Data sources
    - StructlogAuditSink / ConsoleAuditSink / InMemoryAuditSink: Audit sinks
    - InMemoryMetricsCollector: Metrics collection
"""

from geo_ingestion.adapters.census_transform import census_row_to_record
from geo_ingestion.adapters.console_sink import ConsoleAuditSink
from geo_ingestion.adapters.memory_sink import InMemoryAuditSink
from geo_ingestion.adapters.metrics_collector import InMemoryMetricsCollector
from geo_ingestion.adapters.mock_connector import MockCensusConnector
from geo_ingestion.adapters.retrying_connector import RetryingConnector
from geo_ingestion.adapters.structlog_sink import StructlogAuditSink

__all__ = [
    "census_row_to_record",
    "ConsoleAuditSink",
    "InMemoryAuditSink",
    "InMemoryMetricsCollector",
    "MockCensusConnector",
    "RetryingConnector",
    "StructlogAuditSink",
]
