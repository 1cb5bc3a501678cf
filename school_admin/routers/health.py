"""Health check endpoints."""
from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse
import logging

from ..core.database import health_check_db

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/api/healthcheck")
async def healthcheck():
    """Liveness probe"""
    return Response(status_code=status.HTTP_200_OK)


@router.get("/health/db-health")
async def database_health():
    """Database connectivity check; 503 when the database does not answer"""
    if await health_check_db():
        return {"status": "healthy", "database": "reachable"}
    logger.warning("Database health check reported unhealthy")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unhealthy", "database": "unreachable"}
    )
