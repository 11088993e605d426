"""Portfolio metrics shown at the top of the dashboard."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from analytics.models import ExecutionLog, Flow
from core.constants import ExecutionLogStatus, FlowStatus

TOP_PERFORMER_COUNT = 3
PROBLEM_SUCCESS_RATE = 80
PROBLEM_ERROR_COUNT = 5


@dataclass
class FlowMetrics:
    total_flows: int = 0
    active_flows: int = 0
    duplicate_flows: int = 0
    orphan_flows: int = 0
    total_executions: int = 0
    success_rate: float = 0.0
    monthly_cost: float = 0.0
    avg_execution_time: float = 0.0
    top_performing_flows: List[str] = field(default_factory=list)
    problem_flows: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_flows": self.total_flows,
            "active_flows": self.active_flows,
            "duplicate_flows": self.duplicate_flows,
            "orphan_flows": self.orphan_flows,
            "total_executions": self.total_executions,
            "success_rate": round(self.success_rate, 2),
            "monthly_cost": round(self.monthly_cost, 2),
            "avg_execution_time": round(self.avg_execution_time, 2),
            "top_performing_flows": self.top_performing_flows,
            "problem_flows": self.problem_flows,
        }


def calculate_flow_metrics(
    flows: Sequence[Flow],
    execution_logs: Sequence[ExecutionLog] = (),
) -> FlowMetrics:
    """
    Summarize a flow inventory.

    Duplicate and orphan counts read the flags stored on the records, not
    the detectors' own judgement. Success rate is measured over execution
    logs.

    Args:
        flows: Flow inventory
        execution_logs: Recorded runs of those flows

    Returns:
        FlowMetrics summary
    """
    total_runs = len(execution_logs)
    successful = sum(1 for log in execution_logs if log.status == ExecutionLogStatus.SUCCESS)

    active = [f for f in flows if f.status == FlowStatus.ACTIVE]
    top = sorted(active, key=lambda f: f.success_rate, reverse=True)[:TOP_PERFORMER_COUNT]
    problems = [
        f.id for f in flows
        if f.success_rate < PROBLEM_SUCCESS_RATE
        or f.performance.error_count > PROBLEM_ERROR_COUNT
    ]

    return FlowMetrics(
        total_flows=len(flows),
        active_flows=len(active),
        duplicate_flows=sum(1 for f in flows if f.duplicate_of is not None),
        orphan_flows=sum(1 for f in flows if f.orphan),
        total_executions=total_runs,
        success_rate=successful / total_runs * 100 if total_runs else 0.0,
        monthly_cost=sum(f.cost.monthly for f in flows),
        avg_execution_time=(
            sum(f.avg_execution_time for f in flows) / len(flows) if flows else 0.0
        ),
        top_performing_flows=[f.id for f in top],
        problem_flows=problems,
    )
