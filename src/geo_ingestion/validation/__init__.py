"""
Validation Package - Schema Validation and Quality Scoring.

This package provides the first gate of the ingestion pipeline:
    - SchemaValidator: Canonical schema + business rules per record
    - QualityScorer: Completeness / accuracy / consistency / overall

Design Principles:
    - Never short-circuit: all findings are reported together
    - Clear, rule-tagged findings
    - Configurable business rules
"""

from geo_ingestion.validation.quality_scorer import QualityScorer
from geo_ingestion.validation.schema_validator import (
    MIN_OVERALL_QUALITY,
    SchemaValidator,
)

__all__ = [
    "MIN_OVERALL_QUALITY",
    "QualityScorer",
    "SchemaValidator",
]
