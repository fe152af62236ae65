"""
In-Memory Audit Sink.

Keeps every event in a list; used by tests and by callers that want to
post-process a run's audit trail themselves.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, Dict, List, Tuple


class InMemoryAuditSink:
    """Thread-safe in-memory audit sink."""

    def __init__(self) -> None:
        self._events: List[Tuple[str, Dict[str, Any]]] = []
        self._lock = Lock()

    def log(self, event_name: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            self._events.append((event_name, dict(payload)))

    @property
    def events(self) -> List[Tuple[str, Dict[str, Any]]]:
        with self._lock:
            return list(self._events)

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def payloads(self, event_name: str) -> List[Dict[str, Any]]:
        return [payload for name, payload in self.events if name == event_name]

    def count(self, event_name: str) -> int:
        return len(self.payloads(event_name))

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
