"""
FastAPI Application Factory

Creates and configures the reporting API application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import structlog

from bi_dashboard.config import get_settings
from bi_dashboard.database.connection import init_database, close_database
from bi_dashboard.serving.api.errors import register_error_handlers
from bi_dashboard.serving.api.middleware import RequestLoggingMiddleware
from bi_dashboard.serving.api.routes import (
    health_router,
    dashboard_router,
    orders_router,
    customers_router,
    products_router,
    revenue_router,
    employees_router,
    offices_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    from bi_dashboard.config.logging import configure_logging
    configure_logging()

    logger.info("Starting BI Dashboard API")

    # Requests fail with a 500 envelope until the store is reachable
    try:
        await init_database()
        logger.info("Database initialized")
    except Exception as e:
        logger.warning("Database init failed", error=str(e))

    yield

    logger.info("Shutting down...")
    await close_database()


def create_api_app(use_lifespan: bool = True) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        use_lifespan: Open and close the connection pool with the app.
            Tests disable it and override the session dependency instead.

    Returns:
        Configured FastAPI app instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Classicmodels BI Dashboard API",
        description="Read-only sales, customer, product and employee reporting",
        version=settings.version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan if use_lifespan else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)

    app.include_router(health_router, prefix="/api", tags=["Health"])
    app.include_router(dashboard_router, prefix="/api/dashboard", tags=["Dashboard"])
    app.include_router(orders_router, prefix="/api/orders", tags=["Orders"])
    app.include_router(customers_router, prefix="/api/customers", tags=["Customers"])
    app.include_router(products_router, prefix="/api", tags=["Products"])
    app.include_router(revenue_router, prefix="/api/revenue", tags=["Revenue"])
    app.include_router(employees_router, prefix="/api/employees", tags=["Employees"])
    app.include_router(offices_router, prefix="/api", tags=["Offices"])

    @app.get("/")
    async def root():
        """Basic status so deployments don't 404 on the root path."""
        return {"status": "ok", "message": "Dashboard API is running"}

    return app
