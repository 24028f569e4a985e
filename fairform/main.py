"""
FastAPI application with assembled routers.

Initializes the FastAPI app, owns the shared HTTP client for upstream calls
and launches uvicorn when run directly.

Dependencies: fastapi, httpx, fairform.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fairform.api.error_handling import register_exception_handlers
from fairform.api.routers import (
    cron_router,
    health_router,
    intake_router,
    sessions_router,
)
from fairform.boundary.db import Base, get_async_engine
from fairform.configs import get_settings
from fairform.observability import configure_logging
from fairform.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, opens the shared HTTP client and, for sqlite
    development databases, creates the tables.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    app.state.http_client = httpx.AsyncClient(timeout=settings.openai.timeout_seconds)
    if settings.database.is_sqlite:
        async with get_async_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite schema created")
    logger.info("FairForm AI backend started", extra={"environment": settings.environment})

    yield

    # Shutdown
    await app.state.http_client.aclose()
    logger.info("HTTP client closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="FairForm AI API",
        description="AI intake classification and copilot session lifecycle",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(intake_router, prefix="/api/v1")
    app.include_router(sessions_router, prefix="/api/v1")
    app.include_router(cron_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "fairform.main:app",
        host="0.0.0.0",
        port=8000,
    )
