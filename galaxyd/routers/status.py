"""Status router for galaxyd.

Provides health check information.
"""

import logging
import time

from fastapi import APIRouter
from fastapi import Request

from ..services.broadcast import get_broadcaster

logger = logging.getLogger(__name__)

router = APIRouter(tags=["status"])

# Track start time for uptime calculation
_start_time = time.time()


@router.get("/health")
async def health_check(request: Request) -> dict[str, object]:
    """Health check endpoint.

    Returns:
        Status, uptime, subscriber count and whether mock mode is running
    """
    return {
        "status": "healthy",
        "uptime_seconds": round(time.time() - _start_time, 3),
        "subscribers": get_broadcaster().subscriber_count,
        "mock_mode": getattr(request.app.state, "mock_task", None) is not None,
    }
