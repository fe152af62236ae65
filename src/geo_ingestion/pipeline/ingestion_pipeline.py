"""
Ingestion Pipeline - Main Orchestrator.

The IngestionPipeline drives one run end to end:
    fetch -> batch -> per-record validate + govern -> aggregate -> finalize

Batches are processed strictly in sequence; records within a batch run
concurrently on a bounded thread pool and the batch completes only when
every record's chain has finished. Each record task returns its own
outcome; outcomes are merged into the run tally after the join, so no
shared counters are touched from worker threads.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from geo_ingestion.config.models import PipelineConfig
from geo_ingestion.domain import records
from geo_ingestion.domain.entities import (
    AuditEvent,
    PipelineError,
    PipelineResult,
    PipelineStage,
    utc_now,
)
from geo_ingestion.domain.value_objects import FetchParams, FetchResponse
from geo_ingestion.governance.truth_governor import TruthGovernor
from geo_ingestion.interfaces.audit_sink import AuditSink, safe_emit
from geo_ingestion.interfaces.connector import Connector
from geo_ingestion.interfaces.metrics_collector import MetricsCollector
from geo_ingestion.validation.schema_validator import SchemaValidator

logger = logging.getLogger(__name__)

# Minimum accepted/processed ratio of a successful run with rejections
MIN_ACCEPTANCE_RATIO = 0.95


@dataclass(frozen=True)
class RecordOutcome:
    """Result of one record's validate + govern chain."""

    accepted: bool
    error: Optional[PipelineError] = None


@dataclass
class _RunTally:
    """Aggregate counters of one run; only touched by the calling thread."""

    processed: int = 0
    accepted: int = 0
    rejected: int = 0
    errors: List[PipelineError] = field(default_factory=list)
    fatal: bool = False

    def merge(self, outcome: RecordOutcome) -> None:
        self.processed += 1
        if outcome.accepted:
            self.accepted += 1
        else:
            self.rejected += 1
        if outcome.error is not None:
            self.errors.append(outcome.error)

    def fail(self, message: str) -> None:
        self.fatal = True
        self.errors.append(PipelineError(stage=PipelineStage.PIPELINE, message=message))


def create_batches(items: Sequence[Any], batch_size: int) -> Iterator[Sequence[Any]]:
    """Yield consecutive slices of ``batch_size`` items; the last may be shorter."""
    for start in range(0, len(items), batch_size):
        yield items[start:start + batch_size]


def is_successful_run(processed: int, accepted: int, rejected: int) -> bool:
    """Zero rejections, or at least 95% of a non-empty run accepted."""
    if rejected == 0:
        return True
    return processed > 0 and accepted / processed >= MIN_ACCEPTANCE_RATIO


class IngestionPipeline:
    """Orchestrates validation and governance over fetched records."""

    def __init__(
        self,
        config: PipelineConfig,
        validator: Optional[SchemaValidator] = None,
        governor: Optional[TruthGovernor] = None,
        audit_sink: Optional[AuditSink] = None,
        metrics_collector: Optional[MetricsCollector] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize pipeline with all dependencies.

        Args:
            config: Source name, batch size, concurrency, quality threshold
            validator: Schema validator (defaults to canonical rules)
            governor: Truth Governor (defaults to canonical policy,
                      sharing this pipeline's audit sink)
            audit_sink: Receives run and per-record audit events
            metrics_collector: For performance metrics (optional)
            clock: Source of approval timestamps
        """
        self.config = config
        self.validator = validator or SchemaValidator()
        self.governor = governor or TruthGovernor(audit_sink=audit_sink)
        self.audit_sink = audit_sink
        self.metrics_collector = metrics_collector
        self._clock = clock
        self._stats_lock = threading.Lock()
        self._totals: Dict[str, int] = {
            "runs": 0,
            "records_processed": 0,
            "records_accepted": 0,
            "records_rejected": 0,
        }

    def execute(
        self,
        connector: Connector,
        params: FetchParams,
        cancel_event: Optional[threading.Event] = None,
    ) -> PipelineResult:
        """
        Execute one ingestion run.

        Args:
            connector: Data source, called exactly once
            params: Connector request parameters
            cancel_event: If set, the run stops at the next batch boundary

        Returns:
            PipelineResult; connector and per-record failures are folded
            into its error list rather than raised
        """
        start_time = time.perf_counter()
        correlation_id = str(uuid.uuid4())
        tally = _RunTally()
        result: Optional[PipelineResult] = None

        try:
            safe_emit(
                self.audit_sink,
                AuditEvent.PIPELINE_START,
                {
                    "source": self.config.source,
                    "params": params,
                    "correlation_id": correlation_id,
                },
            )

            response = self._fetch(connector, params, tally)
            if response is not None:
                self._process_batches(response.data, tally, correlation_id, cancel_event)
        finally:
            duration = time.perf_counter() - start_time
            result = self._build_result(tally, duration, correlation_id)
            self._record_run(result)
            safe_emit(
                self.audit_sink,
                AuditEvent.PIPELINE_COMPLETE,
                result.model_dump(mode="json"),
            )

        return result

    def _fetch(
        self,
        connector: Connector,
        params: FetchParams,
        tally: _RunTally,
    ) -> Optional[FetchResponse]:
        """Fetch once; any failure is run-fatal and recorded on the tally."""
        fetch_start = time.perf_counter()
        try:
            raw = connector.fetch_geographic_data(params)
            response = (
                raw if isinstance(raw, FetchResponse) else FetchResponse.model_validate(raw)
            )
        except Exception as e:
            logger.error(f"Fetch from {self.config.source} failed: {e}")
            tally.fail(str(e) or type(e).__name__)
            return None

        if self.metrics_collector:
            self.metrics_collector.record_timing(
                "fetch_seconds", time.perf_counter() - fetch_start
            )
        logger.info(
            f"Fetched {response.record_count} records from {self.config.source}"
        )
        return response

    def _process_batches(
        self,
        items: Sequence[Any],
        tally: _RunTally,
        correlation_id: str,
        cancel_event: Optional[threading.Event],
    ) -> None:
        for index, batch in enumerate(create_batches(items, self.config.batch_size)):
            if cancel_event is not None and cancel_event.is_set():
                logger.warning(f"Run {correlation_id[:8]} cancelled before batch {index}")
                tally.fail(f"Run cancelled after {index} batches")
                return
            self._process_batch(batch, tally, correlation_id)

    def _process_batch(
        self,
        batch: Sequence[Any],
        tally: _RunTally,
        correlation_id: str,
    ) -> None:
        """Fan out one batch, join, then merge outcomes."""
        batch_start = time.perf_counter()
        workers = min(self.config.concurrency, len(batch))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ingest") as pool:
            outcomes = list(
                pool.map(lambda record: self._process_record(record, correlation_id), batch)
            )

        for outcome in outcomes:
            tally.merge(outcome)

        batch_duration = time.perf_counter() - batch_start
        logger.debug(
            f"Batch of {len(batch)} done in {batch_duration:.3f}s: "
            f"{sum(o.accepted for o in outcomes)} accepted"
        )
        if self.metrics_collector:
            self.metrics_collector.record_timing("batch_duration_seconds", batch_duration)

    def _process_record(self, record: Any, correlation_id: str) -> RecordOutcome:
        """Run one record's chain; never raises."""
        try:
            return self._run_record_chain(record, correlation_id)
        except Exception as e:
            logger.exception(f"Unexpected failure on record {records.record_id(record)}")
            return self._reject(record, f"Unexpected error: {e}")

    def _run_record_chain(self, record: Any, correlation_id: str) -> RecordOutcome:
        """Validate, check quality threshold, review, then accept."""
        record_id = records.record_id(record)
        base = {"recordId": record_id, "correlation_id": correlation_id}

        # 1. Schema validation
        safe_emit(self.audit_sink, AuditEvent.VALIDATION_START, base)
        validation = self.validator.validate(record)
        if not validation.valid:
            safe_emit(
                self.audit_sink,
                AuditEvent.VALIDATION_FAILED,
                {
                    **base,
                    "errors": [e.model_dump(mode="json") for e in validation.errors],
                    "quality": validation.quality.model_dump(),
                },
            )
            detail = validation.first_error_message or (
                f"overall quality {validation.quality.overall} below minimum"
            )
            return self._reject(record, f"Validation failed: {detail}")

        # 2. Pipeline quality threshold
        if validation.quality.overall < self.config.quality_threshold:
            safe_emit(
                self.audit_sink,
                AuditEvent.QUALITY_THRESHOLD_FAILED,
                {
                    **base,
                    "quality": validation.quality.model_dump(),
                    "threshold": self.config.quality_threshold,
                },
            )
            return self._reject(
                record,
                f"Quality threshold not met: {validation.quality.overall} "
                f"< {self.config.quality_threshold}",
            )

        # 3. Truth Governor review
        safe_emit(self.audit_sink, AuditEvent.TRUTH_GOVERNOR_REVIEW, base)
        review = self.governor.review(record)
        self.governor.log_decision(record, review, correlation_id=correlation_id)
        if not review.approved:
            safe_emit(
                self.audit_sink,
                AuditEvent.TRUTH_GOVERNOR_REJECTED,
                {
                    **base,
                    "reason": review.reason,
                    "severity": review.severity.value if review.severity else None,
                },
            )
            return self._reject(record, f"Truth Governor rejected: {review.reason}")

        # 4. Acceptance
        records.mark_approved(record, self._clock())
        safe_emit(
            self.audit_sink,
            AuditEvent.RECORD_ACCEPTED,
            {**base, "quality": validation.quality.model_dump()},
        )
        return RecordOutcome(accepted=True)

    def _reject(self, record: Any, message: str) -> RecordOutcome:
        return RecordOutcome(
            accepted=False,
            error=PipelineError(
                record_id=records.record_id(record),
                stage=PipelineStage.PROCESSING,
                message=message,
            ),
        )

    def _build_result(
        self,
        tally: _RunTally,
        duration: float,
        correlation_id: str,
    ) -> PipelineResult:
        success = not tally.fatal and is_successful_run(
            tally.processed, tally.accepted, tally.rejected
        )
        return PipelineResult(
            success=success,
            records_processed=tally.processed,
            records_accepted=tally.accepted,
            records_rejected=tally.rejected,
            errors=list(tally.errors),
            duration_seconds=duration,
            correlation_id=correlation_id,
        )

    def _record_run(self, result: PipelineResult) -> None:
        with self._stats_lock:
            self._totals["runs"] += 1
            self._totals["records_processed"] += result.records_processed
            self._totals["records_accepted"] += result.records_accepted
            self._totals["records_rejected"] += result.records_rejected

        if self.metrics_collector:
            tags = {"source": self.config.source}
            self.metrics_collector.record_timing(
                "pipeline_duration_seconds", result.duration_seconds, tags
            )
            self.metrics_collector.record_count(
                "records_processed_total", result.records_processed, tags
            )
            self.metrics_collector.record_count(
                "records_accepted_total", result.records_accepted, tags
            )
            self.metrics_collector.record_count(
                "records_rejected_total", result.records_rejected, tags
            )

        logger.info(
            f"Run {result.correlation_id[:8] if result.correlation_id else '-'} "
            f"finished: {result.records_accepted}/{result.records_processed} accepted, "
            f"success={result.success} ({result.duration_seconds:.3f}s)"
        )

    def get_statistics(self) -> Mapping[str, Any]:
        """Source, configuration and cumulative counts across runs."""
        with self._stats_lock:
            totals = dict(self._totals)
        return {
            "source": self.config.source,
            "config": self.config.model_dump(),
            **totals,
        }
