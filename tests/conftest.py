"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import copy
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from geo_ingestion.adapters.memory_sink import InMemoryAuditSink
from geo_ingestion.adapters.metrics_collector import InMemoryMetricsCollector
from geo_ingestion.adapters.mock_connector import MockCensusConnector
from geo_ingestion.config.models import IngestionConfig, PipelineConfig

PROJECT_ROOT = Path(__file__).parent.parent

# Reference "now" for tests that pin the clock
REFERENCE_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

_VALID_RECORD: Dict[str, Any] = {
    "id": "geo-0001",
    "type": "Feature",
    "name": {"primary": "Springfield city", "alternates": ["Springfield"]},
    "geometry": {"type": "Point", "coordinates": [-89.6501, 39.7817]},
    "properties": {
        "classification": {"category": "administrative", "subcategory": "census_place"},
        "location": {
            "country": "United States",
            "countryCode": "US",
            "state": "Illinois",
            "stateCode": "IL",
        },
        "demographics": {"population": 114394, "households": 48000, "populationYear": 2020},
    },
    "metadata": {
        "created": "2024-01-01T00:00:00Z",
        "modified": "2024-01-02T00:00:00Z",
        "version": 1,
        "source": {
            "provider": "US Census Bureau",
            "dataset": "dec/pl",
            "ingestionDate": "2024-01-02T00:00:00Z",
            "license": "Public Domain",
            "apiEndpoint": "https://api.census.gov/data",
            "ingestionMethod": "api",
        },
        "quality": {
            "completeness": 1.0,
            "accuracy": 1.0,
            "consistency": 1.0,
            "overall": 1.0,
            "validationPassed": True,
        },
        "governance": {"truthGovernorApproved": True, "dataClassification": "public"},
    },
}


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def default_config_path() -> Path:
    """Path to the shipped default configuration."""
    return PROJECT_ROOT / "config" / "default.yaml"


@pytest.fixture
def reference_now() -> datetime:
    return REFERENCE_NOW


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock pinned to the reference time."""
    return lambda: REFERENCE_NOW


@pytest.fixture
def record_factory() -> Callable[..., Dict[str, Any]]:
    """
    Factory for fresh, fully valid records.

    Each call returns an independent deep copy so tests can mutate it.
    """

    def make(record_id: str = "geo-0001") -> Dict[str, Any]:
        record = copy.deepcopy(_VALID_RECORD)
        record["id"] = record_id
        return record

    return make


@pytest.fixture
def valid_record(record_factory) -> Dict[str, Any]:
    """A single fully valid record."""
    return record_factory()


@pytest.fixture
def audit_sink() -> InMemoryAuditSink:
    """Create in-memory audit sink for testing."""
    return InMemoryAuditSink()


@pytest.fixture
def metrics_collector() -> InMemoryMetricsCollector:
    """Create metrics collector for testing."""
    return InMemoryMetricsCollector()


@pytest.fixture
def mock_connector() -> MockCensusConnector:
    """Create mock connector for testing."""
    return MockCensusConnector(seed=42, record_count=20)


@pytest.fixture
def default_config() -> IngestionConfig:
    """Create default ingestion configuration."""
    return IngestionConfig()


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    """Small batches so that multi-batch paths are exercised."""
    return PipelineConfig(source="census", batch_size=8, concurrency=4)
