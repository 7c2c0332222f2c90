"""
Health check endpoint.
"""

from fastapi import APIRouter, Request

from src.api.dependencies import SettingsDep
from src.api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, settings: SettingsDep) -> HealthResponse:
    """Report that the service is up and which model keys are checked against."""
    return HealthResponse(
        status="healthy",
        model=settings.model_name,
        version=request.app.version,
    )
