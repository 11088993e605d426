"""Version 1 of the Automation Atlas analytics API, mounted at API_V1_PREFIX."""

from fastapi import APIRouter

from api.routes import analytics, health

api_v1_router = APIRouter()

api_v1_router.include_router(health.router, tags=["Health"])
api_v1_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
