"""Health check endpoint."""

from fastapi import APIRouter

from src.api.models.health import HealthResponse
from src.config.case_config import CaseStoreConfig

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return health status and the configured store backend."""
    return HealthResponse(
        status="healthy",
        store_backend=CaseStoreConfig.from_environment().backend.value,
    )
