"""
Test Fixtures - Shared Test Data and Configurations.

This package contains reusable test fixtures:
    - sample_config.yaml: Partial configuration relying on defaults

Usage:
    Reach the files through the ``sample_config_path`` fixture.
"""
