"""FastAPI application entry point.

Creates and configures the box-office metrics API serving the
dashboard payload.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from boxoffice.api.routers import metrics
from boxoffice.api.schemas import HealthResponse
from boxoffice.database.connection import check_connection
from boxoffice.etl.utils import setup_logger
from boxoffice.settings import get_masked_settings, settings

logger = setup_logger("api")

# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Logs the masked configuration, then validates the database
    connection on startup.

    Args:
        _app: FastAPI application instance.

    Yields:
        None after startup tasks complete.
    """
    if not settings.database.is_configured:
        logger.warning("Neither POSTGRES_PASSWORD nor DATABASE_URL is set")
    logger.debug(f"Configuration: {get_masked_settings()}")
    check_connection()
    logger.info("Database connection verified")
    yield


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="Box-office metrics aggregated from scraped sources",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    _configure_cors(app)
    _register_routers(app)
    return app


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )


def _register_routers(app: FastAPI) -> None:
    """Register API routers and root endpoints.

    Args:
        app: FastAPI application instance.
    """
    app.include_router(metrics.router, prefix="/api")
    app.add_api_route(
        "/api/health",
        health_check,
        methods=["GET"],
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================


def health_check() -> HealthResponse:
    """Health check endpoint.

    Returns:
        API status with version and database reachability.
    """
    try:
        check_connection()
        database = True
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        database = False

    return HealthResponse(
        status="healthy" if database else "degraded",
        version=settings.api.version,
        database=database,
    )


def run_server() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(
        "boxoffice.api.main:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )


if __name__ == "__main__":
    run_server()
