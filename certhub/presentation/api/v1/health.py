import structlog
from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from ....infrastructure.logging import Timer
from ..dependencies import get_database

router = APIRouter(tags=["health"])
logger = structlog.get_logger()


@router.get("/health", summary="Health check")
async def health() -> dict:
    """Liveness probe."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness check")
async def readiness() -> dict:
    """Readiness probe: one database round trip."""
    try:
        with Timer() as t:
            await get_database().ping()
        database = {"status": "healthy", "latency_ms": t.duration_ms}
    except (SQLAlchemyError, OSError) as e:
        logger.error("Database health check failed", error=str(e))
        database = {"status": "unhealthy", "error": type(e).__name__}

    return {
        "status": "ready" if database["status"] == "healthy" else "degraded",
        "checks": {"database": database},
    }
