"""
Health check endpoints.
"""

from fastapi import APIRouter

from app.core.dependencies import AppSettings
from shared_schemas.scanner import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def get_health_status(settings: AppSettings):
    """
    Basic health check endpoint.

    Returns service status and version.
    """
    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION
    )
