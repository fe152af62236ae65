"""
Audit Sink Protocol.

Defines the abstract interface for audit emission. The audit sink
receives one structured event per pipeline milestone and per governance
decision, for compliance and post-hoc investigation.

Design Notes:
    - Fire-and-forget: callers never depend on the outcome
    - ``safe_emit`` is the only way core code talks to a sink; it
      converts sink failures into a WARNING log line
    - No side effects on validation or governance logic
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

from geo_ingestion.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class AuditSink(Protocol):
    """Abstract interface for audit emission."""

    def log(self, event_name: str, payload: Dict[str, Any]) -> None:
        """
        Record one audit event.

        Args:
            event_name: Event name, e.g. ``PIPELINE_START``
            payload: JSON-serializable event data
        """
        ...


def safe_emit(
    sink: Optional[AuditSink],
    event: Union[AuditEvent, str],
    payload: Dict[str, Any],
) -> None:
    """Emit an event, logging and discarding any sink failure."""
    if sink is None:
        return
    event_name = event.value if isinstance(event, AuditEvent) else event
    try:
        sink.log(event_name, payload)
    except Exception as e:
        logger.warning(f"Audit sink failed for {event_name}: {e}")
