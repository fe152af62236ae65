"""
Test Suite for Geo Ingestion.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: End-to-end pipeline tests
    - performance/: Throughput benchmarks
    - fixtures/: Shared test fixtures and sample data

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest --cov=src/geo_ingestion          # With coverage
"""
