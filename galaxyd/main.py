"""Main FastAPI application for the galaxyd fan-out service.

This module creates and configures the FastAPI application that accepts hook
notifications and rebroadcasts them to WebSocket and SSE subscribers.
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config.loader import load_config
from .routers import events_router
from .routers import hooks_router
from .routers import status_router
from .routers import ws_router
from .services.mock_generator import MockWorkloadGenerator

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

config = load_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Starts the mock workload generator when enabled and stops it on shutdown.

    Args:
        app: FastAPI application instance
    """
    # Startup
    logger.info(f"Starting galaxyd on {config.daemon.host}:{config.daemon.port}")
    app.state.mock_task = None
    if config.mock.enabled:
        logger.info(f"Mock mode enabled (root: {config.mock.root})")
        generator = MockWorkloadGenerator(config.mock)
        app.state.mock_task = asyncio.create_task(generator.run())

    yield

    # Shutdown
    task = app.state.mock_task
    if task is not None:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
    logger.info("Shutting down galaxyd")


# Create FastAPI application
app = FastAPI(
    title="galaxyd",
    description="Fan-out service rebroadcasting coding-agent activity over WebSocket and SSE",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.daemon.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(hooks_router)
app.include_router(ws_router)
app.include_router(events_router)
app.include_router(status_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Service information
    """
    return {
        "name": "galaxyd",
        "version": "0.1.0",
        "description": "Agent activity fan-out for the file system galaxy",
        "websocket": "/ws",
        "events": "/api/v1/events",
        "docs": "/docs",
    }
