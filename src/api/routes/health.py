"""Health check endpoints."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies.services import get_image_store
from core.config import settings
from infrastructure.database.session import get_async_session
from infrastructure.storage.local_image_store import LocalImageStore

SERVICE_VERSION = "1.0.0"

logger = structlog.get_logger()

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    image_storage: str | None = None


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies.
    """
    return HealthResponse(
        status="healthy",
        version=SERVICE_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
    image_store: LocalImageStore = Depends(get_image_store),
) -> HealthResponse:
    """
    Detailed health check including database connectivity and whether the
    image directory is usable.
    """
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.warning("health_database_unavailable", error=str(e))
        db_status = "unhealthy"

    directory = image_store.directory
    storage_status = "healthy" if directory.is_dir() or not directory.exists() else "unhealthy"

    overall_status = "healthy" if db_status == storage_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        version=SERVICE_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        database=db_status,
        image_storage=storage_status,
    )
