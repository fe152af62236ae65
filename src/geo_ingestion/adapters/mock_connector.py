"""
Mock Census Connector.

A fake census data source for development and testing. Generates
deterministic census-shaped rows and transforms them into canonical
records, with optional invalid records and injected upstream failures.
"""

from __future__ import annotations

import logging
import random
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from geo_ingestion.adapters.census_transform import census_row_to_record
from geo_ingestion.domain.entities import utc_now
from geo_ingestion.domain.value_objects import FetchMetadata, FetchParams, FetchResponse
from geo_ingestion.interfaces.connector import ConnectorError, ConnectorErrorCode

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.census.gov/data"


class MockCensusConnector:
    """Fake census connector for development and testing."""

    # Sample places (name, state, state FIPS, lon, lat)
    MOCK_PLACES = [
        ("Springfield city", "IL", "17", -89.6501, 39.7817),
        ("Riverside city", "MO", "29", -94.6366, 39.1753),
        ("Fairview town", "TX", "48", -96.6319, 33.1445),
        ("Georgetown city", "KY", "21", -84.5586, 38.2098),
        ("Madison city", "WI", "55", -89.4012, 43.0731),
        ("Franklin city", "TN", "47", -86.8689, 35.9251),
        ("Clinton city", "IA", "19", -90.1887, 41.8445),
        ("Salem city", "OR", "41", -123.0351, 44.9429),
        ("Greenville city", "SC", "45", -82.3940, 34.8526),
        ("Bristol city", "VA", "51", -82.1887, 36.5951),
    ]

    # Latitude given to deliberately invalid records
    INVALID_LATITUDE = 95.0

    def __init__(
        self,
        seed: int = 42,
        record_count: int = 100,
        invalid_ratio: float = 0.0,
        fail_with: Optional[ConnectorErrorCode] = None,
        fail_times: Optional[int] = None,
        api_url: str = DEFAULT_API_URL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize mock connector.

        Args:
            seed: Random seed for reproducibility
            record_count: Records returned per fetch
            invalid_ratio: Share of records given an out-of-range latitude
            fail_with: Error code raised instead of returning data
            fail_times: Number of calls that fail (all calls if None)
            api_url: Endpoint recorded in each record's source block
            clock: Timestamp source for generated records
        """
        if record_count < 0:
            raise ValueError("record_count must be non-negative")
        if not 0.0 <= invalid_ratio <= 1.0:
            raise ValueError("invalid_ratio must be between 0 and 1")
        self._seed = seed
        self._record_count = record_count
        self._invalid_ratio = invalid_ratio
        self._fail_with = fail_with
        self._fail_times = fail_times
        self._api_url = api_url
        self._clock = clock
        self.call_count = 0

    def fetch_geographic_data(self, params: FetchParams) -> FetchResponse:
        """Return a fresh, deterministic page of canonical records."""
        self.call_count += 1
        if self._should_fail():
            logger.warning(f"Mock census fetch failing with {self._fail_with.value}")
            raise ConnectorError(self._fail_with)

        rng = random.Random(self._seed)
        year = int(params.get("year", 2020))
        dataset = str(params.get("dataset", "dec/pl"))
        invalid_count = round(self._record_count * self._invalid_ratio)
        invalid_indexes = set(rng.sample(range(self._record_count), invalid_count))

        now = self._clock()
        records = [
            census_row_to_record(
                self._generate_row(rng, i, year, dataset, i in invalid_indexes),
                api_url=self._api_url,
                now=now,
                record_id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                governance={
                    "truthGovernorApproved": True,
                    "dataClassification": "public",
                },
                quality={
                    "completeness": 1.0,
                    "accuracy": 1.0,
                    "consistency": 1.0,
                    "overall": 1.0,
                    "validationPassed": True,
                },
            )
            for i in range(self._record_count)
        ]

        logger.debug(f"Mock census fetch returned {len(records)} records")
        return FetchResponse(
            data=records,
            metadata=FetchMetadata(total=len(records), page=1, per_page=len(records)),
        )

    def test_connection(self) -> bool:
        """Check whether a fetch would currently succeed."""
        return not self._should_fail(peek=True)

    def _should_fail(self, peek: bool = False) -> bool:
        if self._fail_with is None:
            return False
        if self._fail_times is None:
            return True
        calls = self.call_count + 1 if peek else self.call_count
        return calls <= self._fail_times

    def _generate_row(
        self,
        rng: random.Random,
        index: int,
        year: int,
        dataset: str,
        invalid: bool,
    ) -> Dict[str, Any]:
        name, state, state_fips, lon, lat = self.MOCK_PLACES[index % len(self.MOCK_PLACES)]
        lon += rng.uniform(-0.05, 0.05)
        lat = self.INVALID_LATITUDE if invalid else lat + rng.uniform(-0.05, 0.05)
        return {
            "NAME": name,
            "STATE": state,
            "GEOID": f"{state_fips}{index:05d}",
            "INTPTLON": f"{lon:.6f}",
            "INTPTLAT": f"{lat:.6f}",
            "POP": str(rng.randint(1_000, 250_000)),
            "YEAR": str(year),
            "DATASET": dataset,
        }
