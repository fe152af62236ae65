"""
Governance Package - Truth Governor Policy Engine.

Second gate of the ingestion pipeline. Decides approval of a validated
record and summarizes its violations into an escalation level.
"""

from geo_ingestion.governance.truth_governor import TruthGovernor

__all__ = ["TruthGovernor"]
