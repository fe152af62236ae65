"""
Console Audit Sink.

A simple audit sink that prints one line per event to the console.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict


class ConsoleAuditSink:
    """Simple console-based audit sink."""

    # Per-record events only printed in verbose mode
    RECORD_EVENTS = frozenset(
        {
            "VALIDATION_START",
            "TRUTH_GOVERNOR_REVIEW",
            "TRUTH_GOVERNOR_DECISION",
            "RECORD_ACCEPTED",
        }
    )

    def __init__(self, verbose: bool = True) -> None:
        """
        Initialize console sink.

        Args:
            verbose: If True, print all events. If False, only run
                     milestones and rejections.
        """
        self._verbose = verbose

    def log(self, event_name: str, payload: Dict[str, Any]) -> None:
        """Print one audit event (AuditSink protocol)."""
        if event_name in self.RECORD_EVENTS and not self._verbose:
            return
        self._print(event_name, self._summarize(event_name, payload), payload)

    def _summarize(self, event_name: str, payload: Dict[str, Any]) -> str:
        if event_name == "PIPELINE_START":
            return f"Starting ingestion from {payload.get('source')}"
        if event_name == "PIPELINE_COMPLETE":
            return (
                f"Completed: {payload.get('records_accepted')}/"
                f"{payload.get('records_processed')} accepted, "
                f"success={payload.get('success')} "
                f"({payload.get('duration_seconds', 0.0):.3f}s)"
            )
        if event_name == "TRUTH_GOVERNOR_REJECTED":
            return f"{payload.get('recordId')} rejected: {payload.get('reason')}"
        if event_name == "VALIDATION_FAILED":
            rules = [e.get("rule") for e in payload.get("errors", [])]
            return f"{payload.get('recordId')} failed validation: {rules}"
        return str(payload.get("recordId", ""))

    def _print(self, event_name: str, message: str, payload: Dict[str, Any]) -> None:
        """Internal printing method."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        correlation_id = payload.get("correlation_id")
        corr_id = correlation_id[:8] if correlation_id else "--------"
        print(f"[{timestamp}] [{corr_id}] [{event_name}] {message}")
