"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of geo-object ingestion:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Support for configuration profiles

Configuration Structure:
    - IngestionConfig: Root configuration object
    - PipelineConfig: Source name, batch size, concurrency, quality threshold
    - ValidationRulesConfig: Business rules of the schema validator
    - PolicyConfig: Forbidden actions, required validations, compliance rules
"""

from geo_ingestion.config.loader import ConfigError, ConfigLoader, load_config
from geo_ingestion.config.models import (
    IngestionConfig,
    PipelineConfig,
    PolicyConfig,
    ValidationRulesConfig,
)
from geo_ingestion.rules.definitions import QualityThresholds

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "IngestionConfig",
    "PipelineConfig",
    "PolicyConfig",
    "QualityThresholds",
    "ValidationRulesConfig",
    "load_config",
]
