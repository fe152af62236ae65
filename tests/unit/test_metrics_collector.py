"""
Unit Tests for InMemoryMetricsCollector.

Test Aspects Covered:
    ✅ Business Logic: Timings and counts grouped per metric, tag tracking
    ✅ Error Handling: One metric name cannot mix kinds
"""

from __future__ import annotations

import pytest

from geo_ingestion.interfaces.metrics_collector import MetricsCollector


class TestInMemoryMetricsCollector:
    """Test cases for InMemoryMetricsCollector."""

    def test_satisfies_protocol(self, metrics_collector) -> None:
        assert isinstance(metrics_collector, MetricsCollector)

    def test_summarizes_per_name(self, metrics_collector) -> None:
        """
        SCENARIO: Two batch timings and one tagged run count
        EXPECTED: Kind, count, total, last value and tags per metric
        """
        # Act
        metrics_collector.record_timing("batch_duration_seconds", 0.5)
        metrics_collector.record_timing("batch_duration_seconds", 1.5)
        metrics_collector.record_count("records_accepted_total", 7, {"source": "census"})

        # Assert
        summary = metrics_collector.get_metrics()
        assert summary["batch_duration_seconds"] == {
            "kind": "timing",
            "count": 2,
            "total": 2.0,
            "last": 1.5,
            "tags": {},
        }
        assert summary["records_accepted_total"]["tags"] == {"source": "census"}
        assert metrics_collector.get_values("batch_duration_seconds") == [0.5, 1.5]

    def test_unknown_metric_has_no_values(self, metrics_collector) -> None:
        assert metrics_collector.get_values("fetch_seconds") == []
        assert metrics_collector.get_metrics() == {}

    def test_kind_mismatch_rejected(self, metrics_collector) -> None:
        metrics_collector.record_count("records_processed_total", 3)

        with pytest.raises(ValueError, match="records_processed_total"):
            metrics_collector.record_timing("records_processed_total", 0.1)
