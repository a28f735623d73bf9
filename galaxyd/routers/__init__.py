"""API routers for galaxyd.

This module contains FastAPI routers for all endpoints.
"""

from .events import router as events_router
from .hooks import router as hooks_router
from .status import router as status_router
from .ws import router as ws_router

__all__ = [
    "events_router",
    "hooks_router",
    "status_router",
    "ws_router",
]
