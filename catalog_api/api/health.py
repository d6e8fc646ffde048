"""
Health check endpoint - live database probe
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from catalog_api.database import Database, get_database
from catalog_api.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/health")
async def health_check(database: Database = Depends(get_database)):
    try:
        await database.ping()
    except Exception as exc:
        logger.error(f"Health check failed: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "timeStamp": _timestamp(),
                "database": "disconnected",
                "error": "Database connection failed",
            },
        )

    return {
        "status": "healthy",
        "timeStamp": _timestamp(),
        "database": "connected",
    }
