"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import ping as mongodb_ping
from adapter.neo4j.connection import ping as neo4j_ping
from api.dependencies import BACKEND_NEO4J, STORE_BACKEND

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _check_store() -> tuple[bool, str]:
    ping = neo4j_ping if STORE_BACKEND == BACKEND_NEO4J else mongodb_ping
    if ping():
        return True, "Connection successful"
    return False, "Connection failed or not configured"


@router.get("")
def health():
    """Health check endpoint with store connectivity status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    try:
        healthy, message = _check_store()
    except Exception as e:
        healthy, message = False, f"Connection error: {str(e)[:200]}"
        logger.warning("Store health check failed", extra={"backend": STORE_BACKEND, "error": str(e)})

    health_status["services"][STORE_BACKEND] = {
        "status": "healthy" if healthy else "unhealthy",
        "message": message,
    }

    if not healthy:
        health_status["status"] = "degraded"

    return JSONResponse(
        content=health_status,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
