"""Health check route"""

from fastapi import APIRouter

from app.config import settings
from api.responses import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health-check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint; never requires the admin key"""
    return HealthResponse(status="ok", service=settings.app_name, version=settings.app_version)
