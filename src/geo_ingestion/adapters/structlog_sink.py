"""
Structlog Audit Sink - Structured Audit Events.

Provides:
    - Structured JSON (or console) audit lines via structlog
    - Correlation ID binding for the calling context
    - In-memory event history for inspection

Design Notes:
    - Thread-safe event storage (records are validated on worker threads)
    - Pipeline payloads already carry ``correlation_id``; contextvars
      binding only covers the thread that called ``set_correlation_id``
    - Compatible with the AuditSink protocol
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog

# Events logged at WARNING instead of INFO
_WARNING_EVENTS = frozenset(
    {"VALIDATION_FAILED", "QUALITY_THRESHOLD_FAILED", "TRUTH_GOVERNOR_REJECTED"}
)

# Per-record events logged at DEBUG
_DEBUG_EVENTS = frozenset({"VALIDATION_START", "TRUTH_GOVERNOR_REVIEW"})


class StructlogAuditSink:
    """
    Audit sink writing structured events through structlog.

    Every event is also kept in memory so that a run's audit trail can
    be inspected after the fact.
    """

    def __init__(
        self,
        service_name: str = "geo_ingestion",
        use_json: bool = True,
        log_level: int = logging.INFO,
        keep_history: bool = True,
    ) -> None:
        """
        Initialize the sink.

        Args:
            service_name: Logger name for audit entries
            use_json: Use JSON output (console rendering otherwise)
            log_level: Minimum level written
            keep_history: Keep emitted events in memory
        """
        self.service_name = service_name
        self.use_json = use_json
        self.log_level = log_level
        self.keep_history = keep_history
        self._events: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

        self._configure_structlog()
        self._logger = structlog.get_logger(service_name)

    def _configure_structlog(self) -> None:
        """Configure structlog for structured logging."""
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            # Payloads own the "timestamp" key (governor decision time).
            structlog.processors.TimeStamper(fmt="iso", key="logged_at"),
            structlog.processors.StackInfoRenderer(),
        ]

        if self.use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(self.log_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )

    def set_correlation_id(self, correlation_id: str) -> None:
        """Bind a correlation ID to the current context."""
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    def generate_correlation_id(self) -> str:
        """Generate and bind a new correlation ID."""
        correlation_id = str(uuid.uuid4())
        self.set_correlation_id(correlation_id)
        return correlation_id

    def log(self, event_name: str, payload: Dict[str, Any]) -> None:
        """Write one audit event (AuditSink protocol)."""
        event = {
            "event_type": event_name,
            "emitted_at": datetime.now(timezone.utc).isoformat(),
            **payload,
        }

        if self.keep_history:
            with self._lock:
                self._events.append(event)

        if event_name in _WARNING_EVENTS:
            self._logger.warning(event_name, **payload)
        elif event_name in _DEBUG_EVENTS:
            self._logger.debug(event_name, **payload)
        else:
            self._logger.info(event_name, **payload)

    def get_events(self, event_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get recorded events, optionally of one type."""
        with self._lock:
            events = list(self._events)
        if event_name is None:
            return events
        return [e for e in events if e["event_type"] == event_name]

    def clear(self) -> None:
        """Clear recorded events."""
        with self._lock:
            self._events.clear()
