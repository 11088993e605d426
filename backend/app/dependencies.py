"""FastAPI dependency injection functions."""

from fastapi import Depends

from app.config import Settings, get_settings
from services.analytics_service import AnalyticsService


def get_analytics_service(
    settings: Settings = Depends(get_settings),
) -> AnalyticsService:
    """
    Provide an analytics service for API endpoints.

    The service is stateless, so a new one per request only carries the
    current thresholds from settings.
    """
    return AnalyticsService(settings)
