"""
Integration Tests - End-to-End Pipeline Tests.

These tests verify that all components work together correctly.
Integration tests use the MockCensusConnector to avoid external
dependencies while testing the full workflow.

Test Files:
    - test_ingestion_pipeline.py: Full ingestion workflow
"""
