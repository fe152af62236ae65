"""
Domain Layer - Record Accessors, Outcome Entities and Value Objects.

This package contains the core domain model for geo-object ingestion.
All entities here are pure Python with no external dependencies
(except Pydantic for validation).

Entities:
    - ValidationResult / ValidationError / ValidationWarning
    - GovernorReview / Violation / GovernorWarning
    - PipelineResult / PipelineError

Value Objects:
    - QualityMetrics: Rounded quality scores of one record
    - FetchResponse: Records plus paging metadata from a connector

Records:
    - Raw JSON-like mappings, read through named accessors in
      ``geo_ingestion.domain.records``
"""

from geo_ingestion.domain.entities import (
    AuditEvent,
    EscalationLevel,
    GovernorReview,
    GovernorWarning,
    PipelineError,
    PipelineResult,
    PipelineStage,
    Severity,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    Violation,
)
from geo_ingestion.domain.value_objects import (
    FetchMetadata,
    FetchResponse,
    QualityMetrics,
    RawRecord,
)

__all__ = [
    "AuditEvent",
    "EscalationLevel",
    "FetchMetadata",
    "FetchResponse",
    "GovernorReview",
    "GovernorWarning",
    "PipelineError",
    "PipelineResult",
    "PipelineStage",
    "QualityMetrics",
    "RawRecord",
    "Severity",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "Violation",
]
