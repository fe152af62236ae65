"""
Geo Ingestion - Governed Ingestion of Geographic Records.

Pulls canonical geo-objects from an external connector, validates each
one against a canonical schema and business rules, scores its quality,
subjects it to a governance policy review and stamps accepted records
with an approval marker. Every decision is emitted to an audit sink.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability
    - Rules as tagged data, parsed once from YAML at startup

Main Components:
    - domain: Outcome types, value objects and record accessors
    - rules: Rule variants and the canonical rule sets
    - validation: Canonical schema, SchemaValidator, QualityScorer
    - governance: TruthGovernor policy engine
    - pipeline: IngestionPipeline orchestration
    - interfaces: Connector, AuditSink and MetricsCollector protocols
    - adapters: Mock census connector, audit sinks, metrics collector
    - config: Configuration models and loaders

Example:
    >>> from geo_ingestion import create_pipeline
    >>> from geo_ingestion.adapters import MockCensusConnector
    >>> pipeline = create_pipeline(config_path="config/default.yaml")
    >>> result = pipeline.execute(MockCensusConnector(), {"dataset": "dec/pl"})
    >>> print(f"Accepted {result.records_accepted}/{result.records_processed}")

"""

import logging
from pathlib import Path
from typing import Optional, Union

from geo_ingestion.config.loader import load_config
from geo_ingestion.config.models import IngestionConfig
from geo_ingestion.governance.truth_governor import TruthGovernor
from geo_ingestion.interfaces.audit_sink import AuditSink
from geo_ingestion.interfaces.metrics_collector import MetricsCollector
from geo_ingestion.pipeline.ingestion_pipeline import IngestionPipeline
from geo_ingestion.validation.schema_validator import SchemaValidator

__version__ = "1.0.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Geo Ingestion.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("geo_ingestion").setLevel(level)


def create_pipeline(
    config: Optional[IngestionConfig] = None,
    config_path: Optional[Union[str, Path]] = None,
    profile: Optional[str] = None,
    audit_sink: Optional[AuditSink] = None,
    metrics_collector: Optional[MetricsCollector] = None,
) -> IngestionPipeline:
    """
    Wire a pipeline from configuration.

    Args:
        config: Ready configuration (takes precedence over config_path)
        config_path: YAML file to load when no config is given
        profile: Optional profile merged over the YAML file
        audit_sink: Shared by the pipeline and its governor
        metrics_collector: For performance metrics (optional)

    Returns:
        IngestionPipeline using the configured rules and policy
    """
    if config is None:
        config = load_config(config_path, profile) if config_path else IngestionConfig()

    return IngestionPipeline(
        config=config.pipeline,
        validator=SchemaValidator(rules=config.validation),
        governor=TruthGovernor(policy=config.policy, audit_sink=audit_sink),
        audit_sink=audit_sink,
        metrics_collector=metrics_collector,
    )


__all__ = [
    "IngestionConfig",
    "IngestionPipeline",
    "SchemaValidator",
    "TruthGovernor",
    "__version__",
    "configure_logging",
    "create_pipeline",
]
