"""
In-Memory Metrics Collector.

Keeps every sample the pipeline reports, grouped into one series per
metric name: fetch and batch timings from the batch loop, and per-run
record counts tagged with the source. Batch timings arrive while worker
threads are still finishing, so all access goes through one lock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Dict, List, Optional


@dataclass
class _Series:
    kind: str
    values: List[float] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)


class InMemoryMetricsCollector:
    """Metrics collector for tests and single-process runs."""

    def __init__(self) -> None:
        self._series: Dict[str, _Series] = {}
        self._lock = Lock()

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self._append(name, "timing", duration_seconds, tags)

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self._append(name, "count", value, tags)

    def get_metrics(self) -> Dict[str, Any]:
        """Per metric: kind, sample count, total, last value and latest tags."""
        with self._lock:
            return {
                name: {
                    "kind": series.kind,
                    "count": len(series.values),
                    "total": sum(series.values),
                    "last": series.values[-1],
                    "tags": dict(series.tags),
                }
                for name, series in self._series.items()
            }

    def get_values(self, name: str) -> List[float]:
        """Samples of one metric in recording order (empty if never recorded)."""
        with self._lock:
            series = self._series.get(name)
            return list(series.values) if series else []

    def _append(
        self,
        name: str,
        kind: str,
        value: float,
        tags: Optional[Dict[str, str]],
    ) -> None:
        with self._lock:
            series = self._series.setdefault(name, _Series(kind=kind))
            if series.kind != kind:
                raise ValueError(f"Metric {name} is a {series.kind}, not a {kind}")
            series.values.append(value)
            series.tags.update(tags or {})
