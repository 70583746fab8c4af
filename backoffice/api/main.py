"""
FastAPI application with assembled routers.

Initializes FastAPI app with the admin and health routers and configures
uvicorn server.

Dependencies: fastapi, backoffice.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import logging

import uvicorn
from fastapi import FastAPI

from backoffice.admin.pool import Pool
from backoffice.api.deps.dependencies import get_pool, get_template_cache
from backoffice.configs import get_settings
from backoffice.observability.logger import configure_logging
from .routers import admin_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = logging.getLogger("uvicorn")

    # Startup
    pool = app.dependency_overrides.get(get_pool, get_pool)()
    logger.info(
        "Back office ready with %d admin(s): %s",
        len(pool.get_admins()),
        ", ".join(admin.code for admin in pool.get_admins()),
    )

    yield

    # Shutdown
    get_template_cache().clear()
    logger.info("Template cache cleared")


def create_app(pool: Pool | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        pool: Admin pool to serve; the shared pool from get_pool when omitted

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Back Office",
        description="Admin pages rendering domain objects field by field",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    if pool is not None:
        app.dependency_overrides[get_pool] = lambda: pool

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    return app


if __name__ == "__main__":
    uvicorn.run(
        "backoffice.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
