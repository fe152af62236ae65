"""
Canonical Geo-Object Schema.

Pydantic models describing the structure every ingested record must
conform to: field types, required-ness and formats (ISO-8601 timestamps,
ISO-3166 country codes). Records are checked in strict JSON mode, so a
number sent as a string or a malformed timestamp is a schema violation
rather than a silent coercion.

Unknown keys are allowed at every level; range checks on coordinates
and demographics belong to the business rules, not to the schema.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional, Tuple

import pydantic
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from geo_ingestion.domain import records


def _require_iso_timestamp(value: Any) -> Any:
    # Shares the parser used by the timestamp rules.
    if not isinstance(value, str) or records.parse_timestamp(value) is None:
        raise ValueError("must be an ISO-8601 timestamp string")
    return value


IsoTimestamp = Annotated[datetime, BeforeValidator(_require_iso_timestamp)]


class _CanonicalModel(BaseModel):
    model_config = ConfigDict(extra="allow", strict=True)


class GeoName(_CanonicalModel):
    primary: str = Field(..., min_length=1)
    alternates: List[str] = Field(default_factory=list)


class PointGeometry(_CanonicalModel):
    type: Literal["Point"]
    coordinates: List[float] = Field(..., min_length=2, max_length=3)


class Classification(_CanonicalModel):
    category: str
    subcategory: Optional[str] = None


class Location(_CanonicalModel):
    country: Optional[str] = None
    countryCode: Optional[str] = Field(default=None, pattern=r"^[A-Z]{2}$")
    state: Optional[str] = None
    stateCode: Optional[str] = None


class Demographics(_CanonicalModel):
    population: Optional[int] = None
    households: Optional[int] = None
    populationYear: Optional[int] = None


class Properties(_CanonicalModel):
    classification: Optional[Classification] = None
    location: Optional[Location] = None
    demographics: Optional[Demographics] = None


class Source(_CanonicalModel):
    provider: str = Field(..., min_length=1)
    ingestionDate: IsoTimestamp
    dataset: Optional[str] = None
    license: Optional[str] = None
    apiEndpoint: Optional[str] = None
    ingestionMethod: Optional[str] = None


class QualityBlock(_CanonicalModel):
    completeness: Optional[float] = Field(default=None, ge=0, le=1)
    accuracy: Optional[float] = Field(default=None, ge=0, le=1)
    consistency: Optional[float] = Field(default=None, ge=0, le=1)
    overall: Optional[float] = Field(default=None, ge=0, le=1)
    validationPassed: Optional[bool] = None


class Governance(_CanonicalModel):
    truthGovernorApproved: Optional[bool] = None
    approvalTimestamp: Optional[IsoTimestamp] = None
    dataClassification: Optional[str] = None
    schemaBypassed: Optional[bool] = None
    piiAuthorized: Optional[bool] = None
    gdprCompliant: Optional[bool] = None
    ccpaCompliant: Optional[bool] = None


class Metadata(_CanonicalModel):
    created: IsoTimestamp
    modified: IsoTimestamp
    version: int = Field(..., ge=1)
    source: Source
    quality: Optional[QualityBlock] = None
    governance: Optional[Governance] = None


class GeoObject(_CanonicalModel):
    """The canonical geo-object."""

    id: str = Field(..., min_length=1)
    type: Literal["Feature"]
    name: GeoName
    geometry: PointGeometry
    properties: Properties = Field(default_factory=Properties)
    metadata: Metadata


def json_pointer(location: Tuple[Any, ...]) -> str:
    """Render a Pydantic error location as a JSON pointer, ``root`` if empty."""
    if not location:
        return "root"
    return "/" + "/".join(str(part) for part in location)


def schema_violations(record: Any) -> List[Tuple[str, str]]:
    """
    Check a record against the canonical schema.

    Returns:
        ``(pointer, message)`` pairs, empty if the record conforms
    """
    payload = json.dumps(record, default=str)
    try:
        GeoObject.model_validate_json(payload, strict=True)
    except pydantic.ValidationError as e:
        return [(json_pointer(tuple(err["loc"])), err["msg"]) for err in e.errors()]
    return []
