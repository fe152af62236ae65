"""
Metrics Collector Protocol.

Defines the abstract interface for run metrics. The pipeline records
fetch and batch timings plus accepted/rejected counts when a collector
is supplied; without one it records nothing.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class MetricsCollector(Protocol):
    """Abstract interface for performance metrics."""

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        ...

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        ...

    def get_metrics(self) -> Dict[str, Any]:
        ...
