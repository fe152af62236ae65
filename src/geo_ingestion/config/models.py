"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic and frozen
afterwards; schema and policy definitions are read-only for the life
of the process.
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, Field, field_validator

from geo_ingestion.domain.entities import Severity
from geo_ingestion.rules.defaults import (
    default_business_rules,
    default_compliance_rules,
    default_forbidden_actions,
    default_required_validations,
)
from geo_ingestion.rules.definitions import Rule


class PipelineConfig(BaseModel):
    """Constructor input of the ingestion pipeline."""

    source: str = Field(default="unknown", min_length=1)
    batch_size: int = Field(default=1000, ge=1)
    concurrency: int = Field(default=10, ge=1)
    quality_threshold: float = Field(default=0.90, ge=0, le=1)

    model_config = {"frozen": True}


class ValidationRulesConfig(BaseModel):
    """Business rules evaluated by the schema validator."""

    business_rules: Tuple[Rule, ...] = Field(default_factory=default_business_rules)

    model_config = {"frozen": True}

    @field_validator("business_rules")
    @classmethod
    def _no_high_severity(cls, rules: Tuple[Rule, ...]) -> Tuple[Rule, ...]:
        for rule in rules:
            if rule.severity == Severity.HIGH:
                raise ValueError(f"{rule.id}: business rules are CRITICAL, ERROR or WARNING")
        return rules


class PolicyConfig(BaseModel):
    """Governance policy enforced by the Truth Governor."""

    version: str = "1.0"
    forbidden_actions: Tuple[Rule, ...] = Field(default_factory=default_forbidden_actions)
    required_validations: Tuple[Rule, ...] = Field(
        default_factory=default_required_validations
    )
    compliance_rules: Tuple[Rule, ...] = Field(default_factory=default_compliance_rules)

    model_config = {"frozen": True}

    @property
    def rule_ids(self) -> Tuple[str, ...]:
        return tuple(
            rule.id
            for group in (
                self.forbidden_actions,
                self.required_validations,
                self.compliance_rules,
            )
            for rule in group
        )


class IngestionConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    validation: ValidationRulesConfig = Field(default_factory=ValidationRulesConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)

    model_config = {"frozen": True}
