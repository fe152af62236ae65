"""
Pipeline Package - Orchestration of Ingestion Runs.

This package contains the orchestration logic that turns one connector
fetch into an auditable accept/reject decision per record.

Components:
    - IngestionPipeline: Main orchestrator coordinating all stages
    - create_batches: Fixed-size partitioning of fetched records
    - is_successful_run: Run-level success criterion

The pipeline is responsible for:
    - Fetching once from the connector
    - Processing batches in sequence, records within a batch concurrently
    - Collecting per-record errors and aggregate counts
    - Emitting the audit trail of the run
"""

from geo_ingestion.pipeline.ingestion_pipeline import (
    MIN_ACCEPTANCE_RATIO,
    IngestionPipeline,
    RecordOutcome,
    create_batches,
    is_successful_run,
)

__all__ = [
    "IngestionPipeline",
    "MIN_ACCEPTANCE_RATIO",
    "RecordOutcome",
    "create_batches",
    "is_successful_run",
]
