"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance serving the SNS
HTTP(S) subscription endpoint, and wires remote clients in the lifespan.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.dependencies import get_connection_pool, get_default_service, get_sns_client
from src.api.v1 import router as v1_router
from src.config.log_config import configure_logging
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Verification mailer v1 - SNS delivery endpoint",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates remote clients and the verification service on startup
    - Closes the connection pool on shutdown (postgres tracking store only)
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("Starting application...")
    logger.info(
        "Tracking store: %s, email backend: %s", settings.tracking_store, settings.email_backend
    )

    app.state.service = get_default_service()
    app.state.sns_client = get_sns_client()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    if settings.tracking_store == "postgres":
        get_connection_pool().close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="verifymail",
    description="Verification email handler - at most one verification email per registration",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
