"""Performance anomaly detection.

Each triggered rule yields its own record; records are grouped by flow in
input order and, within a flow, follow the rule table order.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from analytics.models import Flow
from analytics.rules import Rule, fixed, matching_rules
from core.constants import Frequency, Level

SLOW_EXECUTION_SECONDS = 60
LOW_SUCCESS_RATE = 85
HIGH_COST_PER_EXECUTION = 0.5
LOW_REALTIME_VOLUME = 100


def _number(value: float) -> str:
    """Full value; whole numbers drop the trailing ``.0``."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


ANOMALY_RULES: Tuple[Rule, ...] = (
    Rule(
        name="slow_execution",
        level=Level.MEDIUM,
        predicate=lambda f: f.avg_execution_time > SLOW_EXECUTION_SECONDS,
        message=lambda f: f"Slow execution time: {_number(f.avg_execution_time)}s",
        recommendation="Review flow complexity and optimize triggers",
    ),
    Rule(
        name="low_success_rate",
        level=Level.HIGH,
        predicate=lambda f: f.success_rate < LOW_SUCCESS_RATE,
        message=lambda f: f"Low success rate: {_number(f.success_rate)}%",
        recommendation="Review error logs and fix failing conditions",
    ),
    Rule(
        name="high_cost",
        level=Level.MEDIUM,
        predicate=lambda f: f.cost.per_execution > HIGH_COST_PER_EXECUTION,
        message=lambda f: f"High cost per execution: ${_number(f.cost.per_execution)}",
        recommendation="Consider optimizing to reduce API calls",
    ),
    Rule(
        name="trigger_usage_mismatch",
        level=Level.LOW,
        predicate=lambda f: (
            f.frequency == Frequency.REALTIME
            and f.monthly_executions < LOW_REALTIME_VOLUME
        ),
        message=fixed("Real-time trigger with low usage"),
        recommendation="Consider changing to scheduled trigger",
    ),
)


@dataclass
class AnomalyReport:
    flow: Flow
    rule: str
    anomaly: str
    impact: Level
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flow": self.flow.ref(),
            "rule": self.rule,
            "anomaly": self.anomaly,
            "impact": self.impact.value,
            "recommendation": self.recommendation,
        }


def detect_anomalies(
    flows: Sequence[Flow],
    rules: Sequence[Rule] = ANOMALY_RULES,
) -> List[AnomalyReport]:
    """Flag slow, failing, expensive or over-triggered flows."""
    return [
        AnomalyReport(
            flow=flow,
            rule=rule.name,
            anomaly=rule.describe(flow),
            impact=rule.level,
            recommendation=rule.recommendation,
        )
        for flow in flows
        for rule in matching_rules(rules, flow)
    ]
