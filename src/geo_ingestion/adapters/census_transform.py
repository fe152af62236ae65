"""
Census Row Transform.

Maps one census-shaped row (``NAME``, ``INTPTLON``, ``INTPTLAT``, ``POP``,
``YEAR``, ``GEOID``, ``STATE``, ``DATASET``) onto the canonical
geo-object. Unparseable numbers become ``None`` so that the schema
validator, not the transform, reports them.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from geo_ingestion.domain.value_objects import RawRecord

CENSUS_PROVIDER = "US Census Bureau"
CENSUS_LICENSE = "Public Domain"


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def census_row_to_record(
    row: Mapping[str, Any],
    api_url: str,
    now: datetime,
    record_id: Optional[str] = None,
    governance: Optional[Dict[str, Any]] = None,
    quality: Optional[Dict[str, Any]] = None,
) -> RawRecord:
    """
    Transform a census row into a canonical record.

    Args:
        row: Census API row
        api_url: Endpoint the row was fetched from
        now: Timestamp used for created / modified / ingestionDate
        record_id: Record id (random UUID if omitted)
        governance: Optional governance block to attach
        quality: Optional quality block to attach

    Returns:
        Canonical geo-object as a plain dict
    """
    timestamp = now.isoformat()
    metadata: Dict[str, Any] = {
        "created": timestamp,
        "modified": timestamp,
        "version": 1,
        "source": {
            "provider": CENSUS_PROVIDER,
            "dataset": row.get("DATASET"),
            "ingestionDate": timestamp,
            "license": CENSUS_LICENSE,
            "apiEndpoint": api_url,
            "ingestionMethod": "api",
        },
    }
    if quality is not None:
        metadata["quality"] = dict(quality)
    if governance is not None:
        metadata["governance"] = dict(governance)

    return {
        "id": record_id or str(uuid.uuid4()),
        "type": "Feature",
        "name": {"primary": row.get("NAME")},
        "geometry": {
            "type": "Point",
            "coordinates": [_to_float(row.get("INTPTLON")), _to_float(row.get("INTPTLAT"))],
        },
        "properties": {
            "classification": {
                "category": "administrative",
                "subcategory": "census_place",
            },
            "location": {
                "country": "United States",
                "countryCode": "US",
                "state": row.get("STATE"),
            },
            "demographics": {
                "population": _to_int(row.get("POP")),
                "populationYear": _to_int(row.get("YEAR")),
            },
            "identifiers": {"fipsCode": row.get("GEOID")},
        },
        "metadata": metadata,
    }
