"""
Record Accessors - Named Extraction Functions for Geo-Objects.

Records travel through the pipeline as JSON-like mappings. Every read
goes through one of the functions below instead of ad-hoc dotted-path
lookups, so a malformed record (missing blocks, wrong types) always
yields an empty block or None rather than an exception.

Only ``mark_approved`` writes to a record.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

_EMPTY: Mapping[str, Any] = {}


class Section(str, Enum):
    """Closed set of record blocks that rules may inspect."""

    ROOT = "root"
    NAME = "name"
    GEOMETRY = "geometry"
    METADATA = "metadata"
    SOURCE = "source"
    QUALITY = "quality"
    GOVERNANCE = "governance"
    LOCATION = "location"
    DEMOGRAPHICS = "demographics"


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else _EMPTY


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def root_block(record: Any) -> Mapping[str, Any]:
    return _mapping(record)


def name_block(record: Any) -> Mapping[str, Any]:
    return _mapping(root_block(record).get("name"))


def geometry_block(record: Any) -> Mapping[str, Any]:
    return _mapping(root_block(record).get("geometry"))


def metadata_block(record: Any) -> Mapping[str, Any]:
    return _mapping(root_block(record).get("metadata"))


def source_block(record: Any) -> Mapping[str, Any]:
    return _mapping(metadata_block(record).get("source"))


def quality_block(record: Any) -> Mapping[str, Any]:
    return _mapping(metadata_block(record).get("quality"))


def has_quality_block(record: Any) -> bool:
    return isinstance(metadata_block(record).get("quality"), Mapping)


def governance_block(record: Any) -> Mapping[str, Any]:
    return _mapping(metadata_block(record).get("governance"))


def properties_block(record: Any) -> Mapping[str, Any]:
    return _mapping(root_block(record).get("properties"))


def location_block(record: Any) -> Mapping[str, Any]:
    return _mapping(properties_block(record).get("location"))


def demographics_block(record: Any) -> Mapping[str, Any]:
    return _mapping(properties_block(record).get("demographics"))


_SECTION_EXTRACTORS: Dict[Section, Callable[[Any], Mapping[str, Any]]] = {
    Section.ROOT: root_block,
    Section.NAME: name_block,
    Section.GEOMETRY: geometry_block,
    Section.METADATA: metadata_block,
    Section.SOURCE: source_block,
    Section.QUALITY: quality_block,
    Section.GOVERNANCE: governance_block,
    Section.LOCATION: location_block,
    Section.DEMOGRAPHICS: demographics_block,
}


def section_block(record: Any, section: Section) -> Mapping[str, Any]:
    """Return the named block of a record (empty mapping if absent)."""
    return _SECTION_EXTRACTORS[section](record)


def record_id(record: Any) -> Optional[str]:
    value = root_block(record).get("id")
    return None if value is None else str(value)


def coordinates(record: Any) -> Optional[Tuple[float, float]]:
    """Return ``(longitude, latitude)`` or None if not a numeric pair."""
    raw = geometry_block(record).get("coordinates")
    if not isinstance(raw, (list, tuple)) or len(raw) < 2:
        return None
    lon, lat = raw[0], raw[1]
    if not (_is_number(lon) and _is_number(lat)):
        return None
    return float(lon), float(lat)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamps(record: Any) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Return parsed ``(created, modified)`` timestamps."""
    meta = metadata_block(record)
    return parse_timestamp(meta.get("created")), parse_timestamp(meta.get("modified"))


def demographic_value(record: Any, attribute: str) -> Optional[float]:
    value = demographics_block(record).get(attribute)
    return float(value) if _is_number(value) else None


def quality_value(record: Any, attribute: str) -> Optional[float]:
    value = quality_block(record).get(attribute)
    return float(value) if _is_number(value) else None


def serialize(record: Any) -> str:
    """Compact JSON rendering used by content-scanning rules."""
    return json.dumps(record, default=str, separators=(",", ":"))


def count_field_entries(record: Any) -> int:
    """
    Count object keys across the whole record graph.

    Every nested mapping contributes its own keys; sequences are
    traversed without counting their indices.
    """
    if isinstance(record, Mapping):
        return len(record) + sum(count_field_entries(v) for v in record.values())
    if isinstance(record, (list, tuple)):
        return sum(count_field_entries(v) for v in record)
    return 0


# Fields whose presence defines completeness, with their extractors
REQUIRED_FIELDS: Tuple[Tuple[str, Callable[[Any], Any]], ...] = (
    ("id", lambda r: root_block(r).get("id")),
    ("type", lambda r: root_block(r).get("type")),
    ("name.primary", lambda r: name_block(r).get("primary")),
    ("geometry.type", lambda r: geometry_block(r).get("type")),
    ("geometry.coordinates", lambda r: geometry_block(r).get("coordinates")),
    ("metadata.created", lambda r: metadata_block(r).get("created")),
    ("metadata.modified", lambda r: metadata_block(r).get("modified")),
    ("metadata.version", lambda r: metadata_block(r).get("version")),
    ("metadata.source.provider", lambda r: source_block(r).get("provider")),
    ("metadata.source.ingestionDate", lambda r: source_block(r).get("ingestionDate")),
)


def present_required_fields(record: Any) -> int:
    return sum(1 for _, extract in REQUIRED_FIELDS if extract(record) is not None)


def mark_approved(record: Any, approved_at: datetime) -> bool:
    """
    Set the governance approval fields of an accepted record.

    Write-once: a record that already carries an approval timestamp is
    left untouched. Returns True if the fields were written.
    """
    metadata = record.setdefault("metadata", {})
    governance = metadata.setdefault("governance", {})
    if governance.get("approvalTimestamp"):
        return False
    governance["truthGovernorApproved"] = True
    governance["approvalTimestamp"] = approved_at.isoformat()
    return True
