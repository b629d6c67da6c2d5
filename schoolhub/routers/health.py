"""Health check endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
import logging

from ..core.cache import cache
from ..core.config import settings
from ..core.database import get_db, health_check_db
from ..utils.cache_metrics import metrics

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@router.get("/db-health")
async def database_health(session: AsyncSession = Depends(get_db)):
    """Database health check using the session dependency"""
    try:
        result = await session.execute(text("SELECT 1 AS test"))
        return {
            "status": "healthy",
            "database": session.bind.dialect.name,
            "test_result": result.scalar(),
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
            "error_type": type(e).__name__,
        }


@router.get("/cache-health")
async def cache_health():
    """Redis cache health check"""
    if not cache.enabled:
        return {"status": "disabled", "metrics": metrics.get_stats()}
    healthy = await cache.ping()
    return {
        "status": "healthy" if healthy else "unhealthy",
        "metrics": metrics.get_stats(),
    }


@router.get("/full-health")
async def full_health_check():
    """Comprehensive health check"""
    health_status = {
        "service": "healthy",
        "database": "healthy" if await health_check_db() else "unhealthy",
    }
    if cache.enabled:
        health_status["cache"] = "healthy" if await cache.ping() else "unhealthy"

    overall_status = "healthy" if all(
        status == "healthy" for status in health_status.values()
    ) else "degraded"

    return {
        "status": overall_status,
        "components": health_status,
    }
