"""
Quality Scorer - Completeness, Accuracy, Consistency, Overall.

Scores one record given the findings of the schema validator:
    - Completeness: share of the 10 required fields present and non-null
    - Accuracy: share of field entries not referenced by an error
    - Consistency: 1 - (warnings + TIME/DEMO errors) / 10, floored at 0
    - Overall: 0.35 * completeness + 0.35 * accuracy + 0.30 * consistency

All four values are rounded half away from zero to 3 decimals.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from geo_ingestion.domain import records
from geo_ingestion.domain.entities import ValidationError, ValidationWarning
from geo_ingestion.domain.value_objects import QualityMetrics

logger = logging.getLogger(__name__)


class QualityScorer:
    """Computes quality metrics for one record."""

    # Maximum number of tracked consistency findings
    CONSISTENCY_CHECKS = 10

    # Error rule prefixes that count against consistency
    CONSISTENCY_RULE_PREFIXES = ("TIME", "DEMO")

    def score(
        self,
        record: Any,
        errors: Sequence[ValidationError],
        warnings: Sequence[ValidationWarning],
    ) -> QualityMetrics:
        """
        Score a record.

        Args:
            record: The record being validated (not mutated)
            errors: Errors found so far
            warnings: Warnings found so far

        Returns:
            Rounded QualityMetrics
        """
        metrics = QualityMetrics.from_raw(
            completeness=self.completeness(record),
            accuracy=self.accuracy(record, errors),
            consistency=self.consistency(errors, warnings),
        )
        logger.debug(
            f"Quality of {records.record_id(record)}: overall={metrics.overall} "
            f"(c={metrics.completeness}, a={metrics.accuracy}, s={metrics.consistency})"
        )
        return metrics

    def completeness(self, record: Any) -> float:
        return records.present_required_fields(record) / len(records.REQUIRED_FIELDS)

    def accuracy(self, record: Any, errors: Sequence[ValidationError]) -> float:
        total_fields = records.count_field_entries(record)
        if total_fields == 0:
            return 0.0
        error_fields = len({e.field for e in errors})
        return (total_fields - error_fields) / total_fields

    def consistency(
        self,
        errors: Sequence[ValidationError],
        warnings: Sequence[ValidationWarning],
    ) -> float:
        findings = len(warnings) + sum(
            1 for e in errors if e.rule.startswith(self.CONSISTENCY_RULE_PREFIXES)
        )
        return 1 - min(findings / self.CONSISTENCY_CHECKS, 1)
