"""
Performance Tests.

Benchmarks for ingestion throughput:
    - 2000 records < 10 seconds, sequential and concurrent
"""
