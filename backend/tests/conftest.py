"""Shared pytest fixtures for the Automation Atlas analytics test suite.

Provides:
- A flow factory with healthy defaults
- A fixed evaluation time
- FastAPI test client (httpx.AsyncClient)
"""

import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings BEFORE any app imports
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from analytics.models import (  # noqa: E402
    Flow,
    FlowAction,
    FlowCost,
    FlowPerformance,
    FlowTrigger,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time for staleness checks."""
    return NOW


@pytest.fixture
def make_flow():
    """Factory for flows that trip no orphan or anomaly rule by default."""

    def _make(
        id: str = "flow-1",
        name: str = "Sync new leads to CRM",
        actions=("create_contact",),
        trigger: str = "webhook",
        monthly_cost: float = 10.0,
        per_execution: float = 0.1,
        error_count: int = 0,
        **overrides,
    ) -> Flow:
        fields = dict(
            id=id,
            name=name,
            department="sales",
            trigger=FlowTrigger(type=trigger),
            actions=tuple(
                FlowAction(id=f"{id}-a{i}", type=action_type)
                for i, action_type in enumerate(actions)
            ),
            status="active",
            success_rate=100.0,
            avg_execution_time=10.0,
            monthly_executions=200,
            total_executions=2400,
            cost=FlowCost(monthly=monthly_cost, per_execution=per_execution),
            performance=FlowPerformance(error_count=error_count),
            last_run=NOW - timedelta(days=1),
            frequency="daily",
        )
        fields.update(overrides)
        return Flow(**fields)

    return _make


@pytest.fixture
def flow_payload():
    """Factory for camelCase flow records as the dashboard posts them."""

    def _payload(id: str = "flow-1", **overrides) -> dict:
        payload = {
            "id": id,
            "name": "Sync new leads to CRM",
            "tool": "zapier",
            "department": "sales",
            "trigger": {"type": "webhook", "config": {}},
            "actions": [{"id": f"{id}-a0", "type": "create_contact", "config": {}}],
            "status": "active",
            "successRate": 100,
            "avgExecutionTime": 10,
            "monthlyExecutions": 200,
            "totalExecutions": 2400,
            "cost": {"monthly": 10, "perExecution": 0.1},
            "performance": {"errorCount": 0, "warningCount": 0, "avgResponseTime": 1.2},
            "lastRun": (NOW - timedelta(days=1)).isoformat(),
            "frequency": "daily",
            "duplicateOf": None,
        }
        payload.update(overrides)
        return payload

    return _payload


# ---------------------------------------------------------------------------
# App / HTTP client fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app():
    """Create a FastAPI app instance."""
    from app.main import create_app

    yield create_app()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac
