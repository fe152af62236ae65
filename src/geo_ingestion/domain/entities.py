"""
Core Domain Entities.

This module defines the outcome types produced by each gate of the
ingestion pipeline: schema validation, governance review and the
aggregate run result.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from geo_ingestion.domain.value_objects import QualityMetrics


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Severity(str, Enum):
    """Severity of a rule outcome."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    ERROR = "ERROR"
    WARNING = "WARNING"


class EscalationLevel(str, Enum):
    """Coarse severity summary of a governance review."""

    L1_WARNING = "L1_WARNING"
    L2_REJECTION = "L2_REJECTION"
    L3_CRITICAL = "L3_CRITICAL"


class PipelineStage(str, Enum):
    """Stage tag of a pipeline error."""

    PIPELINE = "PIPELINE"  # Run-fatal failures
    PROCESSING = "PROCESSING"  # Per-record failures


class AuditEvent(str, Enum):
    """Names of the events emitted to the audit sink."""

    PIPELINE_START = "PIPELINE_START"
    PIPELINE_COMPLETE = "PIPELINE_COMPLETE"
    VALIDATION_START = "VALIDATION_START"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    QUALITY_THRESHOLD_FAILED = "QUALITY_THRESHOLD_FAILED"
    TRUTH_GOVERNOR_REVIEW = "TRUTH_GOVERNOR_REVIEW"
    TRUTH_GOVERNOR_REJECTED = "TRUTH_GOVERNOR_REJECTED"
    TRUTH_GOVERNOR_DECISION = "TRUTH_GOVERNOR_DECISION"
    RECORD_ACCEPTED = "RECORD_ACCEPTED"


class ValidationError(BaseModel):
    """A blocking finding of the schema validator."""

    field: str
    message: str
    severity: Severity
    rule: str

    model_config = {"frozen": True}

    @field_validator("severity")
    @classmethod
    def _blocking_severity(cls, value: Severity) -> Severity:
        if value not in (Severity.CRITICAL, Severity.ERROR):
            raise ValueError("validation errors are CRITICAL or ERROR")
        return value


class ValidationWarning(BaseModel):
    """A non-blocking finding of the schema validator."""

    field: str
    message: str
    rule: str

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    """Outcome of validating one record."""

    valid: bool
    errors: List[ValidationError] = Field(default_factory=list)
    warnings: List[ValidationWarning] = Field(default_factory=list)
    quality: QualityMetrics

    model_config = {"frozen": True}

    @property
    def error_rules(self) -> List[str]:
        return [e.rule for e in self.errors]

    @property
    def first_error_message(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None


class Violation(BaseModel):
    """A governance policy rule failure."""

    rule_id: str
    rule: str
    reason: str
    severity: Severity

    model_config = {"frozen": True}


class GovernorWarning(BaseModel):
    """A non-blocking compliance finding."""

    rule_id: str
    message: str

    model_config = {"frozen": True}


class GovernorReview(BaseModel):
    """Outcome of a Truth Governor review of one record."""

    approved: bool
    reason: Optional[str] = None
    severity: Optional[Severity] = None
    violations: List[Violation] = Field(default_factory=list)
    warnings: List[GovernorWarning] = Field(default_factory=list)

    model_config = {"frozen": True}


class PipelineError(BaseModel):
    """A stage-tagged failure captured by the orchestrator."""

    record_id: Optional[str] = None
    stage: PipelineStage
    message: str
    timestamp: datetime = Field(default_factory=utc_now)

    model_config = {"frozen": True}


class PipelineResult(BaseModel):
    """Aggregate result of one pipeline run."""

    success: bool
    records_processed: int = Field(default=0, ge=0)
    records_accepted: int = Field(default=0, ge=0)
    records_rejected: int = Field(default=0, ge=0)
    errors: List[PipelineError] = Field(default_factory=list)
    duration_seconds: float = Field(default=0.0, ge=0)
    correlation_id: Optional[str] = None

    @property
    def acceptance_ratio(self) -> Optional[float]:
        """Accepted / processed, or None for an empty run."""
        if self.records_processed == 0:
            return None
        return self.records_accepted / self.records_processed

    @property
    def is_conserved(self) -> bool:
        return self.records_processed == self.records_accepted + self.records_rejected
