"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with mocked dependencies.
Unit tests should be fast, deterministic, and focused.

Test Files:
    - test_schema_validator.py: Schema stage and business rules
    - test_quality_scorer.py: Quality metrics and rounding
    - test_truth_governor.py: Policy review and decision logging
    - test_rules.py: Rule variants and parsing
    - test_config_loader.py: Configuration loading/validation
"""
