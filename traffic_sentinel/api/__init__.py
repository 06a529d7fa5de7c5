"""
API package initialization.

This package contains FastAPI router modules for Traffic Sentinel:
- alerts: Scheduler-triggered checks (unassigned anomaly report, organic report)
- channels: Channel analysis view
"""

from fastapi import APIRouter

from traffic_sentinel.api.alerts import router as alerts_router
from traffic_sentinel.api.channels import router as channels_router

# Create main API router
api_router = APIRouter()

# Both routers carry their own prefix
api_router.include_router(alerts_router)
api_router.include_router(channels_router)

__all__ = [
    "api_router",
    "alerts_router",
    "channels_router",
]
