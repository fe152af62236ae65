"""
Value Objects for Domain Layer.

Value objects are immutable objects that describe characteristics of
records and fetch responses but have no conceptual identity.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from pydantic import BaseModel, Field


# =============================================================================
# Type Aliases for improved readability
# =============================================================================

# A canonical geo-object as delivered by a connector (JSON-like mapping)
RawRecord = Dict[str, Any]

# Connector request parameters (dataset, geography, variables, year, ...)
FetchParams = Dict[str, Any]

# Quality metric weights: overall = 0.35 * completeness + 0.35 * accuracy
# + 0.30 * consistency
COMPLETENESS_WEIGHT = 0.35
ACCURACY_WEIGHT = 0.35
CONSISTENCY_WEIGHT = 0.30

_THOUSANDTHS = Decimal("0.001")


def round_metric(value: float) -> float:
    """Clamp to [0, 1] and round half away from zero to 3 decimals."""
    clamped = min(1.0, max(0.0, float(value)))
    return float(Decimal(repr(clamped)).quantize(_THOUSANDTHS, rounding=ROUND_HALF_UP))


class QualityMetrics(BaseModel):
    """Completeness / accuracy / consistency / overall score of one record."""

    completeness: float = Field(ge=0, le=1)
    accuracy: float = Field(ge=0, le=1)
    consistency: float = Field(ge=0, le=1)
    overall: float = Field(ge=0, le=1)

    model_config = {"frozen": True}

    @classmethod
    def from_raw(
        cls,
        completeness: float,
        accuracy: float,
        consistency: float,
    ) -> "QualityMetrics":
        """
        Build rounded metrics from unrounded component scores.

        The overall score is computed from the unrounded components and
        rounded independently.
        """
        c = min(1.0, max(0.0, completeness))
        a = min(1.0, max(0.0, accuracy))
        s = min(1.0, max(0.0, consistency))
        overall = c * COMPLETENESS_WEIGHT + a * ACCURACY_WEIGHT + s * CONSISTENCY_WEIGHT
        return cls(
            completeness=round_metric(c),
            accuracy=round_metric(a),
            consistency=round_metric(s),
            overall=round_metric(overall),
        )


class FetchMetadata(BaseModel):
    """Paging information returned by a connector."""

    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=0, ge=0, alias="perPage")

    model_config = {"frozen": True, "populate_by_name": True}


class FetchResponse(BaseModel):
    """Result of a single connector fetch."""

    data: List[Any] = Field(
        default_factory=list, description="Canonical records, passed through by identity"
    )
    metadata: FetchMetadata = Field(default_factory=FetchMetadata)

    @property
    def record_count(self) -> int:
        return len(self.data)
