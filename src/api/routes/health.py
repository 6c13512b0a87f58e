"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import get_mongodb_client
from utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _check_mongodb(settings: Settings) -> dict:
    """Ping the configured database (not just the admin db)."""
    client = get_mongodb_client(settings)
    if client is None:
        return {"status": "unhealthy", "message": "Connection failed or not configured"}

    try:
        client[settings.database_name].command('ping')
    except PyMongoError as e:
        logger.warning("MongoDB health check failed", extra={"error": str(e)[:200]})
        return {"status": "unhealthy", "message": f"Connection error: {str(e)[:200]}"}

    return {"status": "healthy", "database": settings.database_name}


@router.get("")
def health(settings: Settings = Depends(get_settings)):
    """Report MongoDB reachability. 503 when the database cannot be reached."""
    mongodb = _check_mongodb(settings)
    healthy = mongodb["status"] == "healthy"

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "services": {"mongodb": mongodb},
        },
    )
