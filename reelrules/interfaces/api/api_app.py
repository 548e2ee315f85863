"""
FastAPI application setup and configuration.
Main entry point for the reelrules API service.

Architecture:
- All routes live under /api/web
- No bare paths that don't start with /api
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reelrules.__version__ import __version__
from reelrules.interfaces.api import web

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  App lifecycle
# ----------------------------------------------------------------------
@asynccontextmanager
async def lifespan(_app_instance: FastAPI):
    """
    FastAPI lifespan context manager.

    Starts the application if the launcher has not already done so and
    stops it on shutdown.
    """
    from reelrules.app import application

    if not application.is_running():
        application.start()
    logger.info("[API] FastAPI starting")

    try:
        yield
    finally:
        logger.info("[API] FastAPI shutting down...")
        application.stop()
        logger.info("[API] Shutdown complete")


# ----------------------------------------------------------------------
#  FastAPI app
# ----------------------------------------------------------------------
api_app = FastAPI(title="reelrules", version=__version__, lifespan=lifespan)


# Global exception handler
@api_app.exception_handler(Exception)
async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[API] Unhandled exception on {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


api_app.include_router(web.router)
