"""
Rule Definitions - Tagged Rule Variants.

Both the schema validator's business rules and the Truth Governor's
policy rules are instances of the models below. Each rule kind is a
frozen Pydantic model carrying its own parameters and a ``kind``
discriminator, so a YAML or dict rule list parses into exactly one
concrete variant per entry.

Every variant answers a single question via ``is_violated``: does this
record trip the rule?
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

from geo_ingestion.domain.entities import Severity
from geo_ingestion.domain import records
from geo_ingestion.domain.records import Section


def _is_missing(value: Any) -> bool:
    return value is None or value is False or value == ""


class QualityThresholds(BaseModel):
    """Minimum quality scores demanded by a quality rule."""

    completeness: float = Field(default=0.95, ge=0, le=1)
    accuracy: float = Field(default=0.95, ge=0, le=1)
    consistency: float = Field(default=0.90, ge=0, le=1)

    model_config = {"frozen": True}


class RuleBase(BaseModel):
    """Fields shared by every rule kind."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    severity: Severity = Severity.CRITICAL
    message: str = ""
    field: str = "root"

    model_config = {"frozen": True}

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        raise NotImplementedError


class CoordinateBoundsRule(RuleBase):
    """Longitude and/or latitude outside configured bounds."""

    kind: Literal["coordinate_bounds"] = "coordinate_bounds"
    check_latitude: bool = True
    check_longitude: bool = True
    min_latitude: float = -90.0
    max_latitude: float = 90.0
    min_longitude: float = -180.0
    max_longitude: float = 180.0

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        point = records.coordinates(record)
        if point is None:
            return False
        lon, lat = point
        if self.check_latitude and not self.min_latitude <= lat <= self.max_latitude:
            return True
        if self.check_longitude and not self.min_longitude <= lon <= self.max_longitude:
            return True
        return False


class TimestampOrderRule(RuleBase):
    """Creation timestamp later than modification timestamp."""

    kind: Literal["timestamp_order"] = "timestamp_order"

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        created, modified = records.timestamps(record)
        return created is not None and modified is not None and created > modified


class FutureTimestampRule(RuleBase):
    """Either record timestamp lies in the future."""

    kind: Literal["future_timestamp"] = "future_timestamp"

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        return any(ts is not None and ts > now for ts in records.timestamps(record))


class NonNegativeRule(RuleBase):
    """A demographic figure below zero."""

    kind: Literal["non_negative"] = "non_negative"
    attribute: str = "population"

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        value = records.demographic_value(record, self.attribute)
        return value is not None and value < 0


class NotExceedingRule(RuleBase):
    """One demographic figure exceeding another (both present)."""

    kind: Literal["not_exceeding"] = "not_exceeding"
    attribute: str = "households"
    limit_attribute: str = "population"

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        value = records.demographic_value(record, self.attribute)
        limit = records.demographic_value(record, self.limit_attribute)
        return value is not None and limit is not None and value > limit


class FlagRule(RuleBase):
    """
    A boolean flag in a record block.

    ``violated_when="unset"`` trips on a missing or falsy flag,
    ``violated_when="set"`` trips only on a literal ``True``.
    """

    kind: Literal["flag"] = "flag"
    section: Section = Section.GOVERNANCE
    flag: str
    violated_when: Literal["unset", "set"] = "unset"

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        value = records.section_block(record, self.section).get(self.flag)
        if self.violated_when == "set":
            return value is True
        return not value


class FieldEqualsRule(RuleBase):
    """A block attribute equal to a forbidden value."""

    kind: Literal["field_equals"] = "field_equals"
    section: Section = Section.SOURCE
    attribute: str
    value: Any

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        return records.section_block(record, self.section).get(self.attribute) == self.value


class FieldsPresentRule(RuleBase):
    """Any of the listed block attributes missing or empty."""

    kind: Literal["fields_present"] = "fields_present"
    section: Section = Section.ROOT
    attributes: List[str] = Field(..., min_length=1)

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        block = records.section_block(record, self.section)
        return any(_is_missing(block.get(attribute)) for attribute in self.attributes)


class KeywordScanRule(RuleBase):
    """
    Keyword found anywhere in the serialized record.

    Matching is a case-insensitive substring test. A truthy governance
    flag named by ``unless_flag`` suppresses the rule.
    """

    kind: Literal["keyword_scan"] = "keyword_scan"
    keywords: List[str] = Field(..., min_length=1)
    unless_flag: Optional[str] = None

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        if self.unless_flag and records.governance_block(record).get(self.unless_flag):
            return False
        text = records.serialize(record).lower()
        return any(keyword.lower() in text for keyword in self.keywords)


class PatternScanRule(RuleBase):
    """Any regular expression matching the serialized record."""

    kind: Literal["pattern_scan"] = "pattern_scan"
    patterns: List[str] = Field(..., min_length=1)

    @field_validator("patterns")
    @classmethod
    def _compilable(cls, value: List[str]) -> List[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid pattern {pattern!r}: {e}") from e
        return value

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        text = records.serialize(record).lower()
        return any(re.search(p, text, re.IGNORECASE) for p in self.patterns)


class QualityThresholdRule(RuleBase):
    """
    Embedded quality block below configured minimums.

    Not evaluated when the record has no quality block or the rule has
    no thresholds; a missing individual score does not trip the rule.
    """

    kind: Literal["quality_thresholds"] = "quality_thresholds"
    thresholds: Optional[QualityThresholds] = None

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        if self.thresholds is None or not records.has_quality_block(record):
            return False
        for attribute in ("completeness", "accuracy", "consistency"):
            value = records.quality_value(record, attribute)
            if value is not None and value < getattr(self.thresholds, attribute):
                return True
        return False


class JurisdictionRule(RuleBase):
    """Location code in a jurisdiction without the matching compliance flag."""

    kind: Literal["jurisdiction"] = "jurisdiction"
    attribute: Literal["countryCode", "stateCode"] = "countryCode"
    codes: List[str] = Field(..., min_length=1)
    compliance_flag: str

    def is_violated(self, record: Mapping[str, Any], now: datetime) -> bool:
        code = records.location_block(record).get(self.attribute)
        if code not in self.codes:
            return False
        return not records.governance_block(record).get(self.compliance_flag)


Rule = Annotated[
    Union[
        CoordinateBoundsRule,
        TimestampOrderRule,
        FutureTimestampRule,
        NonNegativeRule,
        NotExceedingRule,
        FlagRule,
        FieldEqualsRule,
        FieldsPresentRule,
        KeywordScanRule,
        PatternScanRule,
        QualityThresholdRule,
        JurisdictionRule,
    ],
    Field(discriminator="kind"),
]
