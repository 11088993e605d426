"""ROI and business impact estimates.

Savings assume every action replaces five minutes of manual work at the
owning department's hourly rate. Cost is a one-off setup estimate plus a
year of platform fees.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from analytics.models import Flow
from core.constants import Department, FlowStatus

MINUTES_PER_ACTION = 5
SETUP_COST = 500.0
DEFAULT_HOURLY_RATE = 45.0

DEPARTMENT_HOURLY_RATES: Dict[str, float] = {
    Department.SALES.value: 50.0,
    Department.MARKETING.value: 45.0,
    Department.SUPPORT.value: 35.0,
    Department.OPERATIONS.value: 40.0,
    Department.FINANCE.value: 55.0,
}

# Assumed number of automatable processes per existing flow
PROCESS_ESTIMATE_FACTOR = 1.5

# Revenue per execution and conversion uplift (%) for revenue-facing teams
REVENUE_MODEL: Dict[str, Dict[str, float]] = {
    Department.SALES.value: {"per_execution": 50.0, "conversion_impact": 5.0},
    Department.MARKETING.value: {"per_execution": 15.0, "conversion_impact": 3.0},
}


@dataclass
class RoiEstimate:
    """Financial estimate for a single flow.

    ``payback_period`` is in months and is None when the flow saves
    nothing, i.e. it never pays back.
    """
    flow: Flow
    time_saved_minutes: float
    hourly_rate: float
    monthly_savings: float
    annual_savings: float
    total_cost: float
    roi: float
    payback_period: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flow": self.flow.ref(),
            "time_saved_minutes": self.time_saved_minutes,
            "hourly_rate": self.hourly_rate,
            "monthly_savings": round(self.monthly_savings, 2),
            "annual_savings": round(self.annual_savings, 2),
            "total_cost": round(self.total_cost, 2),
            "roi": round(self.roi, 2),
            "payback_period": (
                round(self.payback_period, 2) if self.payback_period is not None else None
            ),
        }


@dataclass
class DepartmentEfficiency:
    department: str
    total_flows: int
    active_flows: int
    average_success_rate: float
    total_monthly_savings: float
    automation_coverage: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "department": self.department,
            "total_flows": self.total_flows,
            "active_flows": self.active_flows,
            "average_success_rate": round(self.average_success_rate, 2),
            "total_monthly_savings": round(self.total_monthly_savings, 2),
            "automation_coverage": round(self.automation_coverage, 2),
        }


@dataclass
class RevenueAttribution:
    flow: Flow
    estimated_monthly_revenue: float
    conversion_impact: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flow": self.flow.ref(),
            "department": self.flow.department,
            "estimated_monthly_revenue": round(self.estimated_monthly_revenue, 2),
            "conversion_impact": self.conversion_impact,
        }


def hourly_rate_for(department: str) -> float:
    """Hourly labour rate; unknown departments fall back to the default."""
    return DEPARTMENT_HOURLY_RATES.get(department, DEFAULT_HOURLY_RATE)


def calculate_roi(flow: Flow) -> RoiEstimate:
    """
    Estimate savings, cost and payback for one flow.

    Args:
        flow: Flow to evaluate

    Returns:
        RoiEstimate with monthly/annual savings, ROI percentage and
        payback period in months
    """
    time_saved = len(flow.actions) * MINUTES_PER_ACTION
    rate = hourly_rate_for(flow.department)

    monthly_savings = (flow.monthly_executions * time_saved / 60) * rate
    annual_savings = monthly_savings * 12
    total_cost = SETUP_COST + flow.cost.monthly * 12

    roi = (annual_savings - total_cost) / total_cost * 100
    payback = total_cost / monthly_savings if monthly_savings > 0 else None

    return RoiEstimate(
        flow=flow,
        time_saved_minutes=time_saved,
        hourly_rate=rate,
        monthly_savings=monthly_savings,
        annual_savings=annual_savings,
        total_cost=total_cost,
        roi=roi,
        payback_period=payback,
    )


def calculate_department_efficiency(
    flows: Sequence[Flow],
    department: str,
) -> DepartmentEfficiency:
    """Aggregate flow health and savings for one department."""
    dept_flows = [f for f in flows if f.department == department]
    count = len(dept_flows)

    active = sum(1 for f in dept_flows if f.status == FlowStatus.ACTIVE)
    average_success = sum(f.success_rate for f in dept_flows) / count if count else 0.0
    savings = sum(calculate_roi(f).monthly_savings for f in dept_flows)

    # Kept as the dashboard has always shown it: 66.67% for any non-empty team
    estimated_processes = count * PROCESS_ESTIMATE_FACTOR
    coverage = count / estimated_processes * 100 if count else 0.0

    return DepartmentEfficiency(
        department=department,
        total_flows=count,
        active_flows=active,
        average_success_rate=average_success,
        total_monthly_savings=savings,
        automation_coverage=coverage,
    )


def calculate_department_breakdown(flows: Sequence[Flow]) -> List[DepartmentEfficiency]:
    """Efficiency for every known department, then any other label seen."""
    departments = [d.value for d in Department]
    for flow in flows:
        if flow.department not in departments:
            departments.append(flow.department)
    return [calculate_department_efficiency(flows, d) for d in departments]


def calculate_revenue_attribution(flows: Sequence[Flow]) -> List[RevenueAttribution]:
    """Revenue estimates for sales and marketing flows, highest first."""
    attributions = []
    for flow in flows:
        model = REVENUE_MODEL.get(flow.department)
        if model is None:
            continue
        attributions.append(RevenueAttribution(
            flow=flow,
            estimated_monthly_revenue=flow.monthly_executions * model["per_execution"],
            conversion_impact=model["conversion_impact"],
        ))

    attributions.sort(key=lambda a: a.estimated_monthly_revenue, reverse=True)
    return attributions
