"""Analytics service.

Runs every analytics pass over one flow collection with the configured
thresholds. Holds no state between calls; the caller supplies the full
collection each time.

Usage:
    service = AnalyticsService(get_settings())
    report = service.analyze(flows, execution_logs)
"""

import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import structlog

from analytics.anomalies import AnomalyReport, detect_anomalies
from analytics.duplicates import DuplicateGroup, detect_duplicates
from analytics.metrics import FlowMetrics, calculate_flow_metrics
from analytics.models import ExecutionLog, Flow
from analytics.orphans import OrphanReport, detect_orphans
from analytics.roi import (
    DepartmentEfficiency,
    RevenueAttribution,
    RoiEstimate,
    calculate_department_breakdown,
    calculate_department_efficiency,
    calculate_revenue_attribution,
    calculate_roi,
)
from app.config import Settings
from core.exceptions import DuplicateFlowIdError
from core.utils import ensure_utc, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class AnalyticsReport:
    """Output of every analytics pass over one collection."""
    generated_at: datetime
    duplicates: List[DuplicateGroup] = field(default_factory=list)
    orphans: List[OrphanReport] = field(default_factory=list)
    anomalies: List[AnomalyReport] = field(default_factory=list)
    roi: List[RoiEstimate] = field(default_factory=list)
    departments: List[DepartmentEfficiency] = field(default_factory=list)
    revenue: List[RevenueAttribution] = field(default_factory=list)
    metrics: FlowMetrics = field(default_factory=FlowMetrics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at.isoformat(),
            "duplicates": [g.to_dict() for g in self.duplicates],
            "orphans": [o.to_dict() for o in self.orphans],
            "anomalies": [a.to_dict() for a in self.anomalies],
            "roi": [r.to_dict() for r in self.roi],
            "departments": [d.to_dict() for d in self.departments],
            "revenue": [r.to_dict() for r in self.revenue],
            "metrics": self.metrics.to_dict(),
        }


def ensure_unique_ids(flows: Sequence[Flow]) -> None:
    """Reject collections where two records share an id.

    Raises:
        DuplicateFlowIdError: If any id appears more than once
    """
    counts = Counter(flow.id for flow in flows)
    repeated = [flow_id for flow_id, n in counts.items() if n > 1]
    if repeated:
        raise DuplicateFlowIdError(repeated)


class AnalyticsService:
    """Applies configured thresholds to the analytics passes."""

    def __init__(self, settings: Settings):
        self.duplicate_threshold = settings.DUPLICATE_THRESHOLD
        self.stale_after_days = settings.STALE_AFTER_DAYS

    def find_duplicates(
        self,
        flows: Sequence[Flow],
        threshold: Optional[float] = None,
    ) -> List[DuplicateGroup]:
        ensure_unique_ids(flows)
        return detect_duplicates(flows, threshold if threshold is not None else self.duplicate_threshold)

    def find_orphans(
        self,
        flows: Sequence[Flow],
        now: Optional[datetime] = None,
    ) -> List[OrphanReport]:
        ensure_unique_ids(flows)
        return detect_orphans(flows, now=now, stale_after_days=self.stale_after_days)

    def find_anomalies(self, flows: Sequence[Flow]) -> List[AnomalyReport]:
        ensure_unique_ids(flows)
        return detect_anomalies(flows)

    def estimate_roi(self, flow: Flow) -> RoiEstimate:
        return calculate_roi(flow)

    def department_efficiency(
        self,
        flows: Sequence[Flow],
        department: str,
    ) -> DepartmentEfficiency:
        ensure_unique_ids(flows)
        return calculate_department_efficiency(flows, department)

    def department_breakdown(self, flows: Sequence[Flow]) -> List[DepartmentEfficiency]:
        ensure_unique_ids(flows)
        return calculate_department_breakdown(flows)

    def revenue_attribution(self, flows: Sequence[Flow]) -> List[RevenueAttribution]:
        ensure_unique_ids(flows)
        return calculate_revenue_attribution(flows)

    def metrics(
        self,
        flows: Sequence[Flow],
        execution_logs: Sequence[ExecutionLog] = (),
    ) -> FlowMetrics:
        ensure_unique_ids(flows)
        return calculate_flow_metrics(flows, execution_logs)

    def analyze(
        self,
        flows: Sequence[Flow],
        execution_logs: Sequence[ExecutionLog] = (),
        now: Optional[datetime] = None,
    ) -> AnalyticsReport:
        """
        Run every analytics pass over one collection.

        Args:
            flows: Full flow inventory
            execution_logs: Recorded runs, used for portfolio metrics
            now: Evaluation time for staleness, defaults to the current UTC time

        Returns:
            AnalyticsReport

        Raises:
            DuplicateFlowIdError: If two flows share an id
        """
        ensure_unique_ids(flows)
        now = ensure_utc(now) if now else utc_now()
        start = time.monotonic()

        report = AnalyticsReport(
            generated_at=now,
            duplicates=detect_duplicates(flows, self.duplicate_threshold),
            orphans=detect_orphans(flows, now=now, stale_after_days=self.stale_after_days),
            anomalies=detect_anomalies(flows),
            roi=[calculate_roi(flow) for flow in flows],
            departments=calculate_department_breakdown(flows),
            revenue=calculate_revenue_attribution(flows),
            metrics=calculate_flow_metrics(flows, execution_logs),
        )

        logger.info(
            "Analytics report generated",
            flows=len(flows),
            execution_logs=len(execution_logs),
            duplicate_groups=len(report.duplicates),
            orphans=len(report.orphans),
            anomalies=len(report.anomalies),
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )
        return report
