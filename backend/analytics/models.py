"""Flow and execution log records consumed by the analytics passes.

Records arrive in one of two shapes:
- the camelCase client record (``successRate``, ``cost.perExecution``,
  ``trigger.type``)
- the flat snake_case row of the ``flows`` table (``success_rate``,
  ``cost_per_execution``, ``trigger_type``, ``error_count``)

``from_dict`` reads either. The dataclasses are frozen: no analytics pass
may mutate its input.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from core.utils import parse_timestamp


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-null value among ``keys``."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _number(value: Any) -> float:
    return float(value) if value is not None else 0.0


def _count(value: Any) -> int:
    return int(value) if value is not None else 0


@dataclass(frozen=True)
class FlowAction:
    """One step of a flow. Only ``type`` takes part in similarity."""
    id: str
    type: str
    config: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], position: int = 0) -> "FlowAction":
        return cls(
            id=str(_pick(data, "id", default=position)),
            type=str(_pick(data, "type", default="")),
            config=dict(_pick(data, "config", default={})),
        )


@dataclass(frozen=True)
class FlowTrigger:
    type: str
    config: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FlowCost:
    monthly: float = 0.0
    per_execution: float = 0.0


@dataclass(frozen=True)
class FlowPerformance:
    error_count: int = 0
    warning_count: int = 0
    avg_response_time: float = 0.0


@dataclass(frozen=True)
class Flow:
    """
    An automation flow synced from Zapier, HubSpot or Lemlist.

    Attributes:
        id: Unique identifier within the analysed collection
        name: Display name, compared for duplicate detection
        department: Owning department; unknown labels are tolerated
        trigger: Trigger type and configuration
        actions: Ordered steps; order is irrelevant for similarity
        status: active, disabled or error
        success_rate: Percentage in [0, 100]
        avg_execution_time: Seconds per run
        monthly_executions: Runs in the last month
        total_executions: Runs since creation
        cost: Monthly and per-execution platform cost
        performance: Error and warning counters
        last_run: Last execution time, None if never run
        frequency: realtime, hourly, daily, weekly or monthly
        duplicate_of: Stored back-reference; never trusted by detection
        orphan: Stored orphan flag; only read by portfolio metrics
    """
    id: str
    name: str
    department: str = ""
    trigger: FlowTrigger = field(default_factory=lambda: FlowTrigger(type="manual"))
    actions: Tuple[FlowAction, ...] = ()
    status: str = "active"
    success_rate: float = 0.0
    avg_execution_time: float = 0.0
    monthly_executions: int = 0
    total_executions: int = 0
    cost: FlowCost = field(default_factory=FlowCost)
    performance: FlowPerformance = field(default_factory=FlowPerformance)
    last_run: Optional[datetime] = None
    frequency: str = "daily"
    duplicate_of: Optional[str] = None
    tool: str = ""
    summary: str = ""
    owner: str = ""
    business_value: str = ""
    orphan: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Flow":
        """Build a flow from a client record or a ``flows`` table row."""
        trigger = data.get("trigger")
        if isinstance(trigger, Mapping):
            trigger_type = _pick(trigger, "type", default="manual")
            trigger_config = _pick(trigger, "config", default={})
        else:
            trigger_type = _pick(data, "trigger_type", "triggerType", default="manual")
            trigger_config = _pick(data, "trigger_config", "triggerConfig", default={})

        cost = data.get("cost")
        if isinstance(cost, Mapping):
            monthly_cost = _pick(cost, "monthly")
            per_execution = _pick(cost, "perExecution", "per_execution")
        else:
            monthly_cost = _pick(data, "monthly_cost", "monthlyCost")
            per_execution = _pick(data, "cost_per_execution", "costPerExecution")

        perf = data.get("performance")
        if not isinstance(perf, Mapping):
            perf = data
        performance = FlowPerformance(
            error_count=_count(_pick(perf, "errorCount", "error_count")),
            warning_count=_count(_pick(perf, "warningCount", "warning_count")),
            avg_response_time=_number(_pick(perf, "avgResponseTime", "avg_response_time")),
        )

        actions = tuple(
            FlowAction.from_dict(action, position)
            for position, action in enumerate(_pick(data, "actions", default=[]))
        )

        return cls(
            id=str(data["id"]),
            name=str(_pick(data, "name", default="")),
            department=str(_pick(data, "department", default="")),
            trigger=FlowTrigger(type=str(trigger_type), config=dict(trigger_config)),
            actions=actions,
            status=str(_pick(data, "status", default="active")),
            success_rate=_number(_pick(data, "successRate", "success_rate")),
            avg_execution_time=_number(_pick(data, "avgExecutionTime", "avg_execution_time")),
            monthly_executions=_count(_pick(data, "monthlyExecutions", "monthly_executions")),
            total_executions=_count(_pick(data, "totalExecutions", "total_executions")),
            cost=FlowCost(monthly=_number(monthly_cost), per_execution=_number(per_execution)),
            performance=performance,
            last_run=parse_timestamp(_pick(data, "lastRun", "last_run")),
            frequency=str(_pick(data, "frequency", default="daily")),
            duplicate_of=_pick(data, "duplicateOf", "duplicate_of"),
            tool=str(_pick(data, "tool", default="")),
            summary=str(_pick(data, "summary", "description", default="")),
            owner=str(_pick(data, "owner", "owner_id", default="")),
            business_value=str(_pick(data, "businessValue", "business_value", default="")),
            orphan=bool(_pick(data, "orphan", default=False)),
        )

    def ref(self) -> Dict[str, Any]:
        """Compact reference used inside result records."""
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class ExecutionLog:
    """A single recorded run of a flow."""
    id: str
    flow_id: str
    status: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: float = 0.0
    error_message: Optional[str] = None
    data_processed: int = 0
    cost: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExecutionLog":
        return cls(
            id=str(data["id"]),
            flow_id=str(_pick(data, "flowId", "flow_id", default="")),
            status=str(_pick(data, "status", default="")),
            start_time=parse_timestamp(_pick(data, "startTime", "start_time")),
            end_time=parse_timestamp(_pick(data, "endTime", "end_time")),
            duration=_number(_pick(data, "duration")),
            error_message=_pick(data, "errorMessage", "error_message"),
            data_processed=_count(_pick(data, "dataProcessed", "data_processed")),
            cost=_number(_pick(data, "cost")),
        )
