"""
Truth Governor - Policy Engine for Record Approval.

Reviews a record against three independent rule groups, all of them
evaluated in full:
    1. Forbidden actions (FA-*): violation when the action is detected
    2. Required validations (RV-*): violation when the check fails
    3. Compliance rules (GDPR, CCPA, classification): warnings only

A record is approved when no CRITICAL violation was found. The reason
and severity of a rejection come from the first CRITICAL violation in
evaluation order (forbidden actions before required validations).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional, Sequence

from geo_ingestion.config.models import PolicyConfig
from geo_ingestion.domain import records
from geo_ingestion.domain.entities import (
    AuditEvent,
    EscalationLevel,
    GovernorReview,
    GovernorWarning,
    Severity,
    Violation,
    utc_now,
)
from geo_ingestion.interfaces.audit_sink import AuditSink, safe_emit
from geo_ingestion.rules.definitions import RuleBase

logger = logging.getLogger(__name__)


class TruthGovernor:
    """Enforces governance policy on validated records."""

    def __init__(
        self,
        policy: Optional[PolicyConfig] = None,
        audit_sink: Optional[AuditSink] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the governor.

        Args:
            policy: Governance policy (defaults to the canonical policy)
            audit_sink: Receives one decision entry per logged review
            clock: Source of "now" for rules and audit timestamps
        """
        self.policy = policy or PolicyConfig()
        self.audit_sink = audit_sink
        self._clock = clock

    def review(self, record: Any) -> GovernorReview:
        """
        Review a record against all governance policies.

        Args:
            record: Canonical geo-object mapping (not mutated)

        Returns:
            GovernorReview with approval decision, violations and warnings
        """
        now = self._clock()
        violations = self._check_rules(self.policy.forbidden_actions, record, now)
        violations.extend(
            self._check_rules(self.policy.required_validations, record, now)
        )
        warnings = [
            GovernorWarning(rule_id=rule.id, message=rule.message)
            for rule in self.policy.compliance_rules
            if rule.is_violated(record, now)
        ]

        critical = [v for v in violations if v.severity == Severity.CRITICAL]
        first = critical[0] if critical else None

        if first is not None:
            logger.debug(
                f"Record {records.record_id(record)} rejected by {first.rule_id} "
                f"({len(critical)} critical violations)"
            )

        return GovernorReview(
            approved=first is None,
            reason=first.reason if first else None,
            severity=first.severity if first else None,
            violations=violations,
            warnings=warnings,
        )

    def _check_rules(
        self,
        rules: Iterable[RuleBase],
        record: Any,
        now: datetime,
    ) -> List[Violation]:
        return [
            Violation(
                rule_id=rule.id,
                rule=rule.name,
                reason=rule.message,
                severity=rule.severity,
            )
            for rule in rules
            if rule.is_violated(record, now)
        ]

    def get_escalation_level(self, violations: Sequence[Violation]) -> EscalationLevel:
        """
        Summarize violations into an escalation level.

        Any CRITICAL violation escalates to L3; otherwise any HIGH one to L2.
        """
        severities = {v.severity for v in violations}
        if Severity.CRITICAL in severities:
            return EscalationLevel.L3_CRITICAL
        if Severity.HIGH in severities:
            return EscalationLevel.L2_REJECTION
        return EscalationLevel.L1_WARNING

    def log_decision(
        self,
        record: Any,
        review: GovernorReview,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Emit one audit entry for a review. Never raises."""
        try:
            entry = {
                "timestamp": self._clock().isoformat(),
                "recordId": records.record_id(record),
                "decision": "APPROVED" if review.approved else "REJECTED",
                "violations": [v.model_dump(mode="json") for v in review.violations],
                "warnings": [w.model_dump(mode="json") for w in review.warnings],
                "escalationLevel": self.get_escalation_level(review.violations).value,
                "correlation_id": correlation_id,
            }
        except Exception as e:
            logger.warning(f"Could not build governance audit entry: {e}")
            return
        safe_emit(self.audit_sink, AuditEvent.TRUTH_GOVERNOR_DECISION, entry)
