"""
Unit Tests for Rule Definitions.

Test Aspects Covered:
    ✅ Business Logic: Each rule kind's violation check
    ✅ Error Handling: Unknown kinds, bad patterns, disallowed severities
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from geo_ingestion.config.models import PolicyConfig, ValidationRulesConfig
from geo_ingestion.domain.records import Section
from geo_ingestion.rules.defaults import (
    default_business_rules,
    default_compliance_rules,
    default_forbidden_actions,
    default_required_validations,
)
from geo_ingestion.rules.definitions import (
    CoordinateBoundsRule,
    FieldEqualsRule,
    FlagRule,
    FutureTimestampRule,
    JurisdictionRule,
    NotExceedingRule,
    PatternScanRule,
    QualityThresholdRule,
)

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


class TestRuleParsing:
    """Test cases for parsing tagged rule variants."""

    def test_parses_kind_into_variant(self) -> None:
        """
        SCENARIO: Rule entries given as plain mappings
        EXPECTED: Each parsed into the class selected by its kind
        """
        # Arrange
        raw = {
            "business_rules": [
                {"id": "GEO-001", "name": "lat", "kind": "coordinate_bounds"},
                {"id": "META-006", "name": "approved", "kind": "flag", "flag": "truthGovernorApproved"},
            ]
        }

        # Act
        config = ValidationRulesConfig.model_validate(raw)

        # Assert
        first, second = config.business_rules
        assert isinstance(first, CoordinateBoundsRule)
        assert isinstance(second, FlagRule)
        assert second.section == Section.GOVERNANCE

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ValidationRulesConfig.model_validate(
                {"business_rules": [{"id": "X-1", "name": "x", "kind": "telepathy"}]}
            )

    def test_high_severity_rejected_for_business_rules(self) -> None:
        """
        SCENARIO: Business rule declared with HIGH severity
        EXPECTED: Configuration rejected
        """
        with pytest.raises(ValidationError):
            ValidationRulesConfig.model_validate(
                {
                    "business_rules": [
                        {"id": "GEO-009", "name": "x", "kind": "coordinate_bounds", "severity": "HIGH"}
                    ]
                }
            )

    def test_invalid_pattern_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PatternScanRule(id="FA-009", name="broken", patterns=["([unclosed"])

    def test_rules_are_frozen(self) -> None:
        rule = default_business_rules()[0]

        with pytest.raises(ValidationError):
            rule.severity = "WARNING"

    def test_default_rule_ids(self) -> None:
        """
        SCENARIO: Canonical rule sets
        EXPECTED: Rule ids in evaluation order
        """
        assert [r.id for r in default_business_rules()] == [
            "GEO-001", "GEO-002", "TIME-002", "TIME-005", "DEMO-001", "DEMO-003", "META-006",
        ]
        assert [r.id for r in default_forbidden_actions()] == [
            "FA-001", "FA-002", "FA-003", "FA-005", "FA-008",
        ]
        assert [r.id for r in default_required_validations()] == [
            "RV-001", "RV-002", "RV-004", "RV-006",
        ]
        assert [r.id for r in default_compliance_rules()] == ["GDPR-001", "CCPA-001", "CLASS-001"]

    def test_default_quality_thresholds(self) -> None:
        policy = PolicyConfig()

        [rule] = [r for r in policy.required_validations if r.id == "RV-004"]
        thresholds = rule.thresholds

        assert (thresholds.completeness, thresholds.accuracy, thresholds.consistency) == (
            0.95, 0.95, 0.90,
        )


class TestRuleChecks:
    """Test cases for individual rule kinds."""

    def test_coordinate_bounds_ignores_missing_geometry(self) -> None:
        rule = CoordinateBoundsRule(id="RV-006", name="bounds")

        assert rule.is_violated({"geometry": {"coordinates": "nowhere"}}, NOW) is False
        assert rule.is_violated({"geometry": {"coordinates": [181.0, 0.0]}}, NOW) is True
        assert rule.is_violated({"geometry": {"coordinates": [180.0, -90.0]}}, NOW) is False

    def test_future_timestamp_checks_each_timestamp(self) -> None:
        """
        SCENARIO: Only the created timestamp lies in the future
        EXPECTED: Violation
        """
        rule = FutureTimestampRule(id="TIME-005", name="future")
        record = {"metadata": {"created": "2025-01-01T00:00:00Z", "modified": "bad"}}

        assert rule.is_violated(record, NOW) is True

    def test_not_exceeding_needs_both_values(self) -> None:
        rule = NotExceedingRule(id="DEMO-003", name="households")

        only_households = {"properties": {"demographics": {"households": 10}}}
        both = {"properties": {"demographics": {"households": 10, "population": 5}}}

        assert rule.is_violated(only_households, NOW) is False
        assert rule.is_violated(both, NOW) is True

    @pytest.mark.parametrize(
        "value, violated_when, expected",
        [
            (None, "unset", True),
            (False, "unset", True),
            (True, "unset", False),
            (None, "set", False),
            ("true", "set", False),
            (True, "set", True),
        ],
    )
    def test_flag_rule(self, value, violated_when, expected) -> None:
        rule = FlagRule(id="F-1", name="flag", flag="schemaBypassed", violated_when=violated_when)
        record = {"metadata": {"governance": {"schemaBypassed": value}}}

        assert rule.is_violated(record, NOW) is expected

    def test_field_equals(self) -> None:
        rule = FieldEqualsRule(id="FA-001", name="manual", attribute="ingestionMethod", value="manual")

        assert rule.is_violated({"metadata": {"source": {"ingestionMethod": "manual"}}}, NOW)
        assert not rule.is_violated({"metadata": {"source": {"ingestionMethod": "api"}}}, NOW)

    def test_quality_threshold_missing_score_not_violated(self) -> None:
        """
        SCENARIO: Quality block present but accuracy missing
        EXPECTED: Only present scores are compared
        """
        rule = default_required_validations()[2]
        record = {"metadata": {"quality": {"completeness": 0.99, "consistency": 0.95}}}

        assert isinstance(rule, QualityThresholdRule)
        assert rule.is_violated(record, NOW) is False

    def test_jurisdiction(self) -> None:
        rule = JurisdictionRule(
            id="CCPA-001",
            name="ccpa",
            attribute="stateCode",
            codes=["CA"],
            compliance_flag="ccpaCompliant",
        )
        record = {"properties": {"location": {"stateCode": "CA"}}}

        assert rule.is_violated(record, NOW) is True
        record["metadata"] = {"governance": {"ccpaCompliant": True}}
        assert rule.is_violated(record, NOW) is False
