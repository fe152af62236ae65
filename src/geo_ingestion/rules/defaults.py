"""
Default Rule Sets.

The canonical business rules checked by the schema validator and the
canonical governance policy enforced by the Truth Governor. The same
rules are shipped as ``config/default.yaml``; these in-code copies are
what the config models fall back to when a section is omitted.
"""

from __future__ import annotations

from typing import Tuple

from geo_ingestion.domain.entities import Severity
from geo_ingestion.domain.records import Section
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
    QualityThresholds,
    QualityThresholdRule,
    RuleBase,
    TimestampOrderRule,
)

EU_COUNTRY_CODES = [
    "AT", "BE", "BG", "HR", "CY", "CZ", "DK", "EE", "FI", "FR", "DE", "GR",
    "HU", "IE", "IT", "LV", "LT", "LU", "MT", "NL", "PL", "PT", "RO", "SK",
    "SI", "ES", "SE",
]

PII_KEYWORDS = ["email", "phone", "ssn", "address", "firstName", "lastName"]

SECRET_PATTERNS = [
    r"api[_-]?key",
    r"secret[_-]?key",
    r"password",
    r"token",
    r"bearer\s+[a-z0-9]",
    r"[a-f0-9]{32}",  # md5-style hash
]


def default_business_rules() -> Tuple[RuleBase, ...]:
    """Business rules of the schema validator, in evaluation order."""
    return (
        CoordinateBoundsRule(
            id="GEO-001",
            name="latitude_range",
            field="geometry.coordinates[1]",
            message="Latitude must be between -90 and 90",
            check_longitude=False,
        ),
        CoordinateBoundsRule(
            id="GEO-002",
            name="longitude_range",
            field="geometry.coordinates[0]",
            message="Longitude must be between -180 and 180",
            check_latitude=False,
        ),
        TimestampOrderRule(
            id="TIME-002",
            name="created_before_modified",
            severity=Severity.ERROR,
            field="metadata",
            message="Created timestamp must be before modified timestamp",
        ),
        FutureTimestampRule(
            id="TIME-005",
            name="no_future_timestamps",
            severity=Severity.ERROR,
            field="metadata",
            message="Timestamps cannot be in the future",
        ),
        NonNegativeRule(
            id="DEMO-001",
            name="non_negative_population",
            field="properties.demographics.population",
            message="Population must be non-negative",
            attribute="population",
        ),
        NotExceedingRule(
            id="DEMO-003",
            name="households_within_population",
            severity=Severity.WARNING,
            field="properties.demographics",
            message="Households should not exceed population",
            attribute="households",
            limit_attribute="population",
        ),
        FlagRule(
            id="META-006",
            name="truth_governor_approval",
            field="metadata.governance.truthGovernorApproved",
            message="Record must be approved by Truth Governor",
            section=Section.GOVERNANCE,
            flag="truthGovernorApproved",
        ),
    )


def default_forbidden_actions() -> Tuple[RuleBase, ...]:
    return (
        FieldEqualsRule(
            id="FA-001",
            name="manual_data_entry",
            message="All data must come via validated API endpoints",
            section=Section.SOURCE,
            attribute="ingestionMethod",
            value="manual",
        ),
        FlagRule(
            id="FA-002",
            name="unvalidated_api_ingestion",
            message="All API data must pass schema validation",
            section=Section.QUALITY,
            flag="validationPassed",
        ),
        FlagRule(
            id="FA-003",
            name="schema_bypass",
            message="No operation may bypass canonical schema validation",
            section=Section.GOVERNANCE,
            flag="schemaBypassed",
            violated_when="set",
        ),
        KeywordScanRule(
            id="FA-005",
            name="unauthorized_pii_access",
            message="Personal Identifiable Information requires explicit authorization",
            keywords=PII_KEYWORDS,
            unless_flag="piiAuthorized",
        ),
        PatternScanRule(
            id="FA-008",
            name="secret_hardcoding",
            message="Secrets must never be hardcoded in source code",
            patterns=SECRET_PATTERNS,
        ),
    )


def default_required_validations() -> Tuple[RuleBase, ...]:
    return (
        FieldsPresentRule(
            id="RV-001",
            name="schema_conformance",
            message="All data must conform to canonical geo-object schema",
            section=Section.ROOT,
            attributes=["id", "type", "name", "geometry"],
        ),
        FieldsPresentRule(
            id="RV-002",
            name="api_authentication",
            message="All API requests must include valid authentication tokens",
            section=Section.SOURCE,
            attributes=["apiEndpoint"],
        ),
        QualityThresholdRule(
            id="RV-004",
            name="data_quality_threshold",
            message="Ingested data must meet minimum quality standards",
            thresholds=QualityThresholds(),
        ),
        CoordinateBoundsRule(
            id="RV-006",
            name="geographic_bounds_check",
            message="Coordinates must be within valid geographic bounds",
        ),
    )


def default_compliance_rules() -> Tuple[RuleBase, ...]:
    return (
        JurisdictionRule(
            id="GDPR-001",
            name="gdpr_compliance",
            severity=Severity.WARNING,
            message="EU data subject detected but GDPR compliance not confirmed",
            attribute="countryCode",
            codes=EU_COUNTRY_CODES,
            compliance_flag="gdprCompliant",
        ),
        JurisdictionRule(
            id="CCPA-001",
            name="ccpa_compliance",
            severity=Severity.WARNING,
            message="California resident data detected but CCPA compliance not confirmed",
            attribute="stateCode",
            codes=["CA"],
            compliance_flag="ccpaCompliant",
        ),
        FieldsPresentRule(
            id="CLASS-001",
            name="data_classification",
            severity=Severity.WARNING,
            message="Data classification not specified",
            section=Section.GOVERNANCE,
            attributes=["dataClassification"],
        ),
    )
