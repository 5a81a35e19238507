"""Health check endpoint for API monitoring."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db
from app.api.schemas.common import APIResponse
from app.config.settings import settings
from app.core.exceptions import DatabaseHealthCheckError

router = APIRouter(tags=["Health"])


class HealthStatus(BaseModel):
    """Health check response data."""

    status: str
    database: str
    version: str
    timestamp: datetime


@router.get("/health", response_model=APIResponse[HealthStatus])
async def health_check(db: AsyncSession = Depends(get_db)) -> APIResponse[HealthStatus]:
    """
    Health check endpoint.

    Verifies API is running and the project store is reachable.
    """
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        raise DatabaseHealthCheckError(f"Database connection failed: {str(e)}") from e

    return APIResponse.ok(
        HealthStatus(
            status="healthy",
            database="connected",
            version=settings.APP_VERSION,
            timestamp=datetime.now(timezone.utc),
        )
    )
