"""Liveness probe.

The analytics engine keeps no state and talks to no backing service, so
answering at all means it is healthy. The active thresholds are reported
so operators can confirm which configuration a replica picked up.
"""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from app.config import get_settings

router = APIRouter(prefix="/health", tags=["health"])

_started_monotonic = time.monotonic()
_started_at = datetime.now(timezone.utc).isoformat()


@router.get("", response_model=dict[str, Any])
async def health() -> dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "started_at": _started_at,
        "uptime_seconds": round(time.monotonic() - _started_monotonic, 1),
        "analytics": {
            "duplicate_threshold": settings.DUPLICATE_THRESHOLD,
            "stale_after_days": settings.STALE_AFTER_DAYS,
        },
    }
