"""
Dynamic form FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.config import settings
from backend.routes import designs as design_routes
from backend.routes import forms as form_routes
from backend.services.design_sessions import design_sessions

logger = logging.getLogger(__name__)


# Background task for cleanup
async def cleanup_task():
    """
    Background task to drop design sessions nobody has touched in a while.

    Runs every 60 seconds.
    """
    while True:
        try:
            dropped = design_sessions.cleanup_idle(settings.DESIGN_SESSION_TTL_MINUTES)
            if dropped > 0:
                logger.info("Dropped %d idle design sessions", dropped)
        except Exception:
            logger.exception("Error in cleanup task")

        await asyncio.sleep(60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Starts the session cleanup task and cancels it on shutdown.
    """
    cleanup_task_handle = asyncio.create_task(cleanup_task())
    logger.info("Background cleanup task started")

    yield

    cleanup_task_handle.cancel()
    try:
        await cleanup_task_handle
    except asyncio.CancelledError:
        logger.info("Background cleanup task stopped")


app = FastAPI(
    title="Dynamic Form",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(design_routes.router)
app.include_router(form_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
