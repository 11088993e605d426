"""Analytics and reporting endpoints.

Every endpoint is stateless: the caller posts the flow inventory and gets
the computed results back. Nothing is stored.
"""

from fastapi import APIRouter, Depends

from api.schemas.analytics import (
    DuplicateRequest,
    FlowCollectionRequest,
    FlowIn,
    MetricsRequest,
    OrphanRequest,
    ReportRequest,
)
from app.dependencies import get_analytics_service
from core.constants import Department
from core.exceptions import DepartmentNotFoundError
from services.analytics_service import AnalyticsService

router = APIRouter(tags=["analytics"])


@router.post("/duplicates", response_model=dict)
async def find_duplicates(
    body: DuplicateRequest,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """
    Group near-duplicate flows.

    Pairs scoring above the threshold (0.7 unless overridden) on name,
    trigger type and action overlap are reported under the earlier flow.
    """
    groups = service.find_duplicates(body.to_flows(), threshold=body.threshold)
    return {
        "total": len(groups),
        "groups": [g.to_dict() for g in groups],
    }


@router.post("/orphans", response_model=dict)
async def find_orphans(
    body: OrphanRequest,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """List stale, failing, erroring or disabled flows with a severity."""
    orphans = service.find_orphans(body.to_flows(), now=body.now)
    return {
        "total": len(orphans),
        "orphans": [o.to_dict() for o in orphans],
    }


@router.post("/anomalies", response_model=dict)
async def find_anomalies(
    body: FlowCollectionRequest,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """List performance anomalies, one record per triggered rule."""
    anomalies = service.find_anomalies(body.to_flows())
    return {
        "total": len(anomalies),
        "anomalies": [a.to_dict() for a in anomalies],
    }


@router.post("/roi", response_model=dict)
async def estimate_roi(
    body: FlowIn,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """
    Estimate savings, ROI and payback period for one flow.

    ``payback_period`` is null when the flow saves nothing.
    """
    return service.estimate_roi(body.to_flow()).to_dict()


@router.post("/departments", response_model=dict)
async def department_breakdown(
    body: FlowCollectionRequest,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """Efficiency of every department, including ones with no flows."""
    departments = service.department_breakdown(body.to_flows())
    return {"departments": [d.to_dict() for d in departments]}


@router.post("/departments/{department}", response_model=dict)
async def department_efficiency(
    department: str,
    body: FlowCollectionRequest,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """
    Efficiency of a single department.

    Known departments always answer, with zeros when they own no flows.
    Any other label must appear on at least one posted flow.
    """
    flows = body.to_flows()
    known = {d.value for d in Department}
    if department not in known and all(f.department != department for f in flows):
        raise DepartmentNotFoundError(department)
    return service.department_efficiency(flows, department).to_dict()


@router.post("/revenue", response_model=dict)
async def revenue_attribution(
    body: FlowCollectionRequest,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """Estimated monthly revenue of sales and marketing flows, highest first."""
    attributions = service.revenue_attribution(body.to_flows())
    return {
        "total_estimated_monthly_revenue": round(
            sum(a.estimated_monthly_revenue for a in attributions), 2
        ),
        "flows": [a.to_dict() for a in attributions],
    }


@router.post("/metrics", response_model=dict)
async def portfolio_metrics(
    body: MetricsRequest,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """Headline numbers for the flow inventory."""
    return service.metrics(body.to_flows(), body.to_logs()).to_dict()


@router.post("/report", response_model=dict)
async def full_report(
    body: ReportRequest,
    service: AnalyticsService = Depends(get_analytics_service),
) -> dict:
    """Run every analysis over the posted inventory."""
    report = service.analyze(body.to_flows(), body.to_logs(), now=body.now)
    return report.to_dict()
