"""
Schema Validator - Structural and Business-Rule Validation of One Record.

Validation runs in three stages:
    A. Canonical schema check (every violation is CRITICAL, rule SCHEMA)
    B. Business rules, always evaluated even when stage A failed
    C. Quality scoring over the accumulated errors and warnings

A record is valid when it has no errors and an overall quality of at
least 0.90. Warnings never invalidate a record.

Design Notes:
    - Read-only: the record is never mutated
    - Rule set injected via ValidationRulesConfig
    - Clock injectable for deterministic future-timestamp checks
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

from geo_ingestion.config.models import ValidationRulesConfig
from geo_ingestion.domain import records
from geo_ingestion.domain.entities import (
    Severity,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    utc_now,
)
from geo_ingestion.validation.canonical_schema import schema_violations
from geo_ingestion.validation.quality_scorer import QualityScorer

logger = logging.getLogger(__name__)

# Minimum overall quality of a valid record
MIN_OVERALL_QUALITY = 0.90

SCHEMA_RULE = "SCHEMA"


class SchemaValidator:
    """Validates records against the canonical schema and business rules."""

    def __init__(
        self,
        rules: Optional[ValidationRulesConfig] = None,
        scorer: Optional[QualityScorer] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize schema validator.

        Args:
            rules: Business rule set (defaults to the canonical rules)
            scorer: Quality scorer (defaults to QualityScorer())
            clock: Source of "now" for future-timestamp rules
        """
        self.rules = rules or ValidationRulesConfig()
        self.scorer = scorer or QualityScorer()
        self._clock = clock

    def validate(self, record: Any) -> ValidationResult:
        """
        Validate a record against all stages.

        Args:
            record: Canonical geo-object mapping

        Returns:
            ValidationResult with errors, warnings and quality metrics
        """
        errors = self._check_schema(record)
        rule_errors, warnings = self._check_business_rules(record)
        errors.extend(rule_errors)

        quality = self.scorer.score(record, errors, warnings)
        valid = not errors and quality.overall >= MIN_OVERALL_QUALITY

        if not valid:
            logger.debug(
                f"Record {records.record_id(record)} invalid: "
                f"rules={[e.rule for e in errors]}, overall={quality.overall}"
            )

        return ValidationResult(
            valid=valid,
            errors=errors,
            warnings=warnings,
            quality=quality,
        )

    def _check_schema(self, record: Any) -> List[ValidationError]:
        """Stage A: canonical schema conformance."""
        return [
            ValidationError(
                field=pointer,
                message=message,
                severity=Severity.CRITICAL,
                rule=SCHEMA_RULE,
            )
            for pointer, message in schema_violations(record)
        ]

    def _check_business_rules(
        self,
        record: Any,
    ) -> Tuple[List[ValidationError], List[ValidationWarning]]:
        """Stage B: business rules, in configured order."""
        errors: List[ValidationError] = []
        warnings: List[ValidationWarning] = []
        now = self._clock()

        for rule in self.rules.business_rules:
            if not rule.is_violated(record, now):
                continue
            if rule.severity == Severity.WARNING:
                warnings.append(
                    ValidationWarning(field=rule.field, message=rule.message, rule=rule.id)
                )
            else:
                errors.append(
                    ValidationError(
                        field=rule.field,
                        message=rule.message,
                        severity=rule.severity,
                        rule=rule.id,
                    )
                )

        return errors, warnings
