"""
Module 05 - Health Check Route

Simple health check endpoint for liveness checks.
"""

from fastapi import APIRouter

from api import __version__
from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status for liveness checks.
    """
    return HealthResponse(ok=True, service="merkledrop-api", version=__version__)


@router.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """
    Root endpoint - same as health check.
    """
    return HealthResponse(ok=True, service="merkledrop-api", version=__version__)
