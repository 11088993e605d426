"""Orphaned flow detection.

A flow is an orphan candidate when it has gone stale, fails most of the
time, accumulates errors, or has been switched off. Each flow is judged on
its own; flows matching no rule are left out of the result.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from analytics.models import Flow
from analytics.rules import Rule, fixed, matching_rules
from core.constants import FlowStatus, Level
from core.utils import ensure_utc, utc_now

DEFAULT_STALE_AFTER_DAYS = 30
LOW_SUCCESS_RATE = 50
HIGH_ERROR_COUNT = 100


@dataclass
class OrphanReport:
    """Why a flow looks abandoned and how urgent it is."""
    flow: Flow
    reason: str
    severity: Level
    matched_rules: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flow": self.flow.ref(),
            "reason": self.reason,
            "severity": self.severity.value,
            "matched_rules": self.matched_rules,
        }


def orphan_rules(
    now: datetime,
    stale_after_days: int = DEFAULT_STALE_AFTER_DAYS,
) -> Tuple[Rule, ...]:
    """Build the orphan rule table for an evaluation time."""
    cutoff = ensure_utc(now) - timedelta(days=stale_after_days)

    return (
        Rule(
            name="stale",
            level=Level.MEDIUM,
            predicate=lambda f: f.last_run is None or ensure_utc(f.last_run) < cutoff,
            message=fixed(f"No executions in {stale_after_days}+ days"),
        ),
        Rule(
            name="low_success",
            level=Level.HIGH,
            predicate=lambda f: f.success_rate < LOW_SUCCESS_RATE,
            message=fixed(f"Success rate below {LOW_SUCCESS_RATE}%"),
        ),
        Rule(
            name="high_errors",
            level=Level.HIGH,
            predicate=lambda f: f.performance.error_count > HIGH_ERROR_COUNT,
            message=fixed("High error count"),
        ),
        Rule(
            name="disabled",
            level=Level.MEDIUM,
            predicate=lambda f: f.status == FlowStatus.DISABLED,
            message=fixed("Flow is disabled"),
        ),
    )


def classify_orphan(flow: Flow, rules: Sequence[Rule]) -> Optional[OrphanReport]:
    """Apply the rule table to one flow; None when nothing matches."""
    matched = list(matching_rules(rules, flow))
    if not matched:
        return None

    # Later rules override earlier ones, but high is never downgraded
    severity = Level.LOW
    for rule in matched:
        if severity != Level.HIGH:
            severity = rule.level

    return OrphanReport(
        flow=flow,
        reason=", ".join(rule.describe(flow) for rule in matched),
        severity=severity,
        matched_rules=[rule.name for rule in matched],
    )


def detect_orphans(
    flows: Sequence[Flow],
    now: Optional[datetime] = None,
    stale_after_days: int = DEFAULT_STALE_AFTER_DAYS,
) -> List[OrphanReport]:
    """
    Flag stale, failing, erroring or disabled flows.

    Args:
        flows: Flows to classify
        now: Evaluation time, defaults to the current UTC time
        stale_after_days: Days without a run before a flow counts as stale

    Returns:
        Reports for flagged flows, in input order
    """
    rules = orphan_rules(now or utc_now(), stale_after_days)
    reports = []
    for flow in flows:
        report = classify_orphan(flow, rules)
        if report is not None:
            reports.append(report)
    return reports
