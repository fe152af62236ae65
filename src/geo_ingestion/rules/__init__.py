"""
Rules Package - Tagged Rule Variants and Default Rule Sets.

One rule abstraction backs both gates of the pipeline:
    - SchemaValidator business rules (GEO, TIME, DEMO, META)
    - TruthGovernor policy rules (FA, RV, compliance)

Rule lists are parsed once into frozen models and never mutated.
"""

from geo_ingestion.rules.definitions import (
    CoordinateBoundsRule,
    FieldEqualsRule,
    FieldsPresentRule,
    FlagRule,
    FutureTimestampRule,
    JurisdictionRule,
    KeywordScanRule,
    NonNegativeRule,
    NotExceedingRule,
    PatternScanRule,
    QualityThresholdRule,
    QualityThresholds,
    Rule,
    RuleBase,
    TimestampOrderRule,
)

__all__ = [
    "CoordinateBoundsRule",
    "FieldEqualsRule",
    "FieldsPresentRule",
    "FlagRule",
    "FutureTimestampRule",
    "JurisdictionRule",
    "KeywordScanRule",
    "NonNegativeRule",
    "NotExceedingRule",
    "PatternScanRule",
    "QualityThresholdRule",
    "QualityThresholds",
    "Rule",
    "RuleBase",
    "TimestampOrderRule",
]
