"""Analytics request schemas.

Flows are posted with the camelCase field names of the dashboard's flow
record; snake_case names are accepted as well.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional, Dict, Any

from analytics.models import ExecutionLog, Flow
from core.constants import (
    BusinessValue,
    ExecutionLogStatus,
    FlowStatus,
    Frequency,
    Tool,
    TriggerType,
)


class ActionIn(BaseModel):
    """One step of a flow."""

    id: Optional[str] = Field(default=None, description="Action ID, defaults to its position")
    type: str = Field(description="Action type tag, e.g. 'send_email'")
    config: Dict[str, Any] = Field(default={}, description="Action configuration")


class TriggerIn(BaseModel):
    """Flow trigger."""

    type: TriggerType = Field(description="webhook, schedule, manual or event")
    config: Dict[str, Any] = Field(default={}, description="Trigger configuration")


class CostIn(BaseModel):
    """Platform cost of a flow."""

    monthly: float = Field(default=0, ge=0, description="Monthly platform cost")
    per_execution: float = Field(default=0, ge=0, alias="perExecution", description="Cost per run")

    class Config:
        populate_by_name = True


class PerformanceIn(BaseModel):
    """Error and warning counters."""

    error_count: int = Field(default=0, ge=0, alias="errorCount")
    warning_count: int = Field(default=0, ge=0, alias="warningCount")
    avg_response_time: float = Field(default=0, ge=0, alias="avgResponseTime")

    class Config:
        populate_by_name = True


class FlowIn(BaseModel):
    """A flow record as synced from Zapier, HubSpot or Lemlist."""

    id: str = Field(min_length=1, description="Flow ID, unique within the request")
    name: str = Field(default="", description="Flow display name")
    department: str = Field(default="", description="Owning department")
    trigger: TriggerIn = Field(default_factory=lambda: TriggerIn(type=TriggerType.MANUAL))
    actions: List[ActionIn] = Field(default=[], description="Ordered flow steps")
    status: FlowStatus = Field(default=FlowStatus.ACTIVE)
    success_rate: float = Field(default=0, ge=0, le=100, alias="successRate")
    avg_execution_time: float = Field(default=0, ge=0, alias="avgExecutionTime")
    monthly_executions: int = Field(default=0, ge=0, alias="monthlyExecutions")
    total_executions: int = Field(default=0, ge=0, alias="totalExecutions")
    cost: CostIn = Field(default_factory=CostIn)
    performance: PerformanceIn = Field(default_factory=PerformanceIn)
    last_run: Optional[datetime] = Field(default=None, alias="lastRun")
    frequency: Frequency = Field(default=Frequency.DAILY)
    duplicate_of: Optional[str] = Field(default=None, alias="duplicateOf")
    tool: Optional[Tool] = Field(default=None, description="Source platform")
    summary: str = Field(default="")
    owner: str = Field(default="")
    business_value: Optional[BusinessValue] = Field(default=None, alias="businessValue")
    orphan: bool = Field(default=False, description="Orphan flag stored on the record")

    class Config:
        populate_by_name = True

    def to_flow(self) -> Flow:
        return Flow.from_dict(self.model_dump(mode="json", by_alias=True))


class ExecutionLogIn(BaseModel):
    """A recorded run of a flow."""

    id: str = Field(min_length=1)
    flow_id: str = Field(alias="flowId")
    status: ExecutionLogStatus
    start_time: Optional[datetime] = Field(default=None, alias="startTime")
    end_time: Optional[datetime] = Field(default=None, alias="endTime")
    duration: float = Field(default=0, ge=0)
    error_message: Optional[str] = Field(default=None, alias="errorMessage")
    data_processed: int = Field(default=0, ge=0, alias="dataProcessed")
    cost: float = Field(default=0, ge=0)

    class Config:
        populate_by_name = True

    def to_log(self) -> ExecutionLog:
        return ExecutionLog.from_dict(self.model_dump(mode="json", by_alias=True))


class FlowCollectionRequest(BaseModel):
    """A full flow inventory to analyse."""

    flows: List[FlowIn] = Field(default=[], description="Flows to analyse")

    def to_flows(self) -> List[Flow]:
        return [flow.to_flow() for flow in self.flows]


class DuplicateRequest(FlowCollectionRequest):
    threshold: Optional[float] = Field(
        default=None, ge=0, le=1, description="Overrides the configured similarity threshold"
    )


class OrphanRequest(FlowCollectionRequest):
    now: Optional[datetime] = Field(default=None, description="Evaluation time, defaults to now")


class MetricsRequest(FlowCollectionRequest):
    execution_logs: List[ExecutionLogIn] = Field(default=[], alias="executionLogs")

    class Config:
        populate_by_name = True

    def to_logs(self) -> List[ExecutionLog]:
        return [log.to_log() for log in self.execution_logs]


class ReportRequest(MetricsRequest):
    now: Optional[datetime] = Field(default=None, description="Evaluation time, defaults to now")
