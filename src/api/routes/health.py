"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.container import Container
from api.dependencies import get_container
from adapter.mongodb.connection import ping

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(container: Container = Depends(get_container)):
    """Health check endpoint with dependency status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    # In-memory stores (tests, local runs) have nothing to ping
    if container.mongo_client is None:
        health_status["services"]["store"] = {
            "status": "healthy",
            "message": "In-memory store"
        }
    elif ping(container.mongo_client):
        health_status["services"]["mongodb"] = {
            "status": "healthy",
            "message": "Connection successful"
        }
    else:
        health_status["services"]["mongodb"] = {
            "status": "unhealthy",
            "message": "Connection failed"
        }
        health_status["status"] = "degraded"

    status_code = (
        status.HTTP_200_OK if health_status["status"] == "healthy"
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )

    return JSONResponse(
        content=health_status,
        status_code=status_code
    )
