"""FastAPI demo application for the QuerySt extractor."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from queryst.config import settings
from queryst.errors import register_exception_handlers
from queryst.routes import examples

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events for startup/shutdown."""
    logging.basicConfig(level=logging.DEBUG if settings.debug else settings.log_level)
    logger.info("%s started", settings.app_name)

    yield  # Application runs here


app = FastAPI(
    title="queryst",
    description="Nested query-string extraction for FastAPI",
    version="0.1.0",
    lifespan=lifespan,
)

# Errors from direct QuerySt.from_query calls and custom handler responses
register_exception_handlers(app)

app.include_router(examples.router)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": "queryst",
        "version": "0.1.0",
        "docs": "/docs",
    }
