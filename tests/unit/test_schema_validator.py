"""
Unit Tests for SchemaValidator.

Test Aspects Covered:
    ✅ Business Logic: Schema stage, business rules, validity decision
    ✅ Edge Cases: Non-mapping records, string-typed numbers, warnings only
    ✅ Error Handling: Schema errors do not stop business rules
"""

from __future__ import annotations

import copy
from datetime import timedelta

from geo_ingestion.config.models import ValidationRulesConfig
from geo_ingestion.domain.entities import Severity
from geo_ingestion.rules.definitions import NonNegativeRule
from geo_ingestion.validation.canonical_schema import json_pointer
from geo_ingestion.validation.schema_validator import SCHEMA_RULE, SchemaValidator


class TestSchemaValidator:
    """Test cases for SchemaValidator."""

    def test_valid_record(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Fully valid, pre-approved record
        EXPECTED: valid, no errors or warnings, perfect quality
        """
        # Arrange
        validator = SchemaValidator(clock=fixed_clock)

        # Act
        result = validator.validate(valid_record)

        # Assert
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []
        assert result.quality.overall == 1.0

    def test_does_not_mutate_record(self, valid_record, fixed_clock) -> None:
        before = copy.deepcopy(valid_record)

        SchemaValidator(clock=fixed_clock).validate(valid_record)

        assert valid_record == before

    def test_latitude_out_of_range(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Record with latitude 95
        EXPECTED: GEO-001 CRITICAL error, record invalid
        """
        # Arrange
        valid_record["geometry"]["coordinates"][1] = 95.0

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.valid is False
        assert result.error_rules == ["GEO-001"]
        assert result.errors[0].severity == Severity.CRITICAL
        assert result.errors[0].field == "geometry.coordinates[1]"

    def test_missing_governor_approval(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Fully populated record without truthGovernorApproved
        EXPECTED: META-006 error, record invalid
        """
        # Arrange
        del valid_record["metadata"]["governance"]["truthGovernorApproved"]

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.valid is False
        assert result.error_rules == ["META-006"]
        assert result.first_error_message == "Record must be approved by Truth Governor"

    def test_warning_does_not_invalidate(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Households exceed population (WARNING rule)
        EXPECTED: Warning recorded, record still valid, consistency reduced
        """
        # Arrange
        valid_record["properties"]["demographics"]["households"] = 200000

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.valid is True
        assert [w.rule for w in result.warnings] == ["DEMO-003"]
        assert result.quality.consistency == 0.9

    def test_created_after_modified(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Creation timestamp after modification timestamp
        EXPECTED: TIME-002 ERROR-severity error
        """
        # Arrange
        valid_record["metadata"]["created"] = "2024-02-01T00:00:00Z"

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.valid is False
        assert result.error_rules == ["TIME-002"]
        assert result.errors[0].severity == Severity.ERROR

    def test_future_timestamp(self, valid_record, fixed_clock, reference_now) -> None:
        """
        SCENARIO: Modified timestamp one day after "now"
        EXPECTED: TIME-005 error
        """
        # Arrange
        valid_record["metadata"]["modified"] = (reference_now + timedelta(days=1)).isoformat()

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert "TIME-005" in result.error_rules

    def test_epoch_string_timestamps_rejected(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: created/modified sent as Unix-epoch strings for the year 2100
        EXPECTED: Schema errors at both pointers, record invalid
        """
        # Arrange
        valid_record["metadata"]["created"] = "4102444800"
        valid_record["metadata"]["modified"] = "4102444800"

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.valid is False
        fields = [e.field for e in result.errors if e.rule == SCHEMA_RULE]
        assert "/metadata/created" in fields
        assert "/metadata/modified" in fields

    def test_epoch_string_order_not_skipped(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Epoch strings with created after modified
        EXPECTED: Reported as schema errors instead of passing silently
        """
        # Arrange
        valid_record["metadata"]["created"] = "1704153600"
        valid_record["metadata"]["modified"] = "1704067200"

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.valid is False
        assert result.errors != []

    def test_far_future_iso_timestamps(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: ISO timestamps in the year 2100
        EXPECTED: Schema accepts the format, TIME-005 rejects the values
        """
        # Arrange
        valid_record["metadata"]["created"] = "2100-01-01T00:00:00Z"
        valid_record["metadata"]["modified"] = "2100-01-01T00:00:00Z"

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.valid is False
        assert result.error_rules == ["TIME-005"]

    def test_non_iso_ingestion_date(self, valid_record, fixed_clock) -> None:
        valid_record["metadata"]["source"]["ingestionDate"] = "yesterday"

        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        assert [e.field for e in result.errors] == ["/metadata/source/ingestionDate"]

    def test_negative_population(self, valid_record, fixed_clock) -> None:
        valid_record["properties"]["demographics"]["population"] = -5

        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        assert "DEMO-001" in result.error_rules
        assert result.valid is False

    def test_missing_required_field(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Record without a type
        EXPECTED: CRITICAL schema error located at /type
        """
        # Arrange
        del valid_record["type"]

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.valid is False
        assert result.errors[0].rule == SCHEMA_RULE
        assert result.errors[0].field == "/type"
        assert result.errors[0].severity == Severity.CRITICAL
        assert result.quality.completeness == 0.9

    def test_string_coordinates_rejected_by_schema(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Coordinates sent as strings
        EXPECTED: Schema errors, no coercion; coordinate rules not tripped
        """
        # Arrange
        valid_record["geometry"]["coordinates"] = ["-89.65", "39.78"]

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        fields = [e.field for e in result.errors]
        assert "/geometry/coordinates/0" in fields
        assert "/geometry/coordinates/1" in fields
        assert set(result.error_rules) == {SCHEMA_RULE}

    def test_business_rules_run_after_schema_errors(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Schema error and a business rule violation together
        EXPECTED: Both reported, schema errors first
        """
        # Arrange
        valid_record["metadata"]["version"] = 0
        valid_record["geometry"]["coordinates"][1] = -91.0

        # Act
        result = SchemaValidator(clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.error_rules == [SCHEMA_RULE, "GEO-001"]
        assert result.errors[0].field == "/metadata/version"

    def test_non_mapping_record(self, fixed_clock) -> None:
        """
        SCENARIO: Record is a JSON array instead of an object
        EXPECTED: Schema error at root, zero accuracy, invalid
        """
        # Act
        result = SchemaValidator(clock=fixed_clock).validate([])

        # Assert
        assert result.valid is False
        assert result.errors[0].field == "root"
        assert result.quality.accuracy == 0.0

    def test_custom_rule_set(self, valid_record, fixed_clock) -> None:
        """
        SCENARIO: Validator configured with a single rule
        EXPECTED: Only that rule is evaluated
        """
        # Arrange
        rules = ValidationRulesConfig(
            business_rules=(
                NonNegativeRule(
                    id="DEMO-002",
                    name="non_negative_households",
                    attribute="households",
                    message="Households must be non-negative",
                ),
            )
        )
        del valid_record["metadata"]["governance"]
        valid_record["properties"]["demographics"]["households"] = -1

        # Act
        result = SchemaValidator(rules=rules, clock=fixed_clock).validate(valid_record)

        # Assert
        assert result.error_rules == ["DEMO-002"]


class TestJsonPointer:
    """Test cases for error location rendering."""

    def test_empty_location_is_root(self) -> None:
        assert json_pointer(()) == "root"

    def test_nested_location(self) -> None:
        assert json_pointer(("metadata", "source", "provider")) == "/metadata/source/provider"
        assert json_pointer(("geometry", "coordinates", 1)) == "/geometry/coordinates/1"
