"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockflow import __version__
from stockflow.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stockflow.api.middleware.error_handler import setup_exception_handlers
from stockflow.api.routes import (
    health_router,
    movements_router,
    notifications_router,
    products_router,
    realtime_router,
)
from stockflow.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Startup: migrate, open the pool, build the live registry, broadcaster
    and service graph, start the periodic sweep.
    Shutdown: stop the sweep, drain pending deliveries, close the pool.
    """
    from stockflow.application.services import build_stock_services
    from stockflow.infrastructure.realtime import SessionRegistry, WebSocketBroadcaster
    from stockflow.infrastructure.storage.sqlite import close_pool, get_pool
    from stockflow.infrastructure.storage.sqlite.migrations import initialize_database

    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        await initialize_database()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    registry = SessionRegistry()
    broadcaster = WebSocketBroadcaster(registry, send_timeout=settings.alerts.broadcast_timeout)
    services = await build_stock_services(broadcaster=broadcaster, settings=settings)

    app.state.registry = registry
    app.state.services = services

    if settings.alerts.sweep_enabled:
        services.sweeper.start()

    logger.info(
        "application_started",
        sweep_enabled=settings.alerts.sweep_enabled,
        alert_recipients=len(services.dispatcher.recipients),
    )

    yield

    logger.info("application_stopping")

    await services.sweeper.stop()
    await services.dispatcher.drain()

    try:
        await close_pool()

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Stock movements, threshold alerts and live notifications",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(movements_router)
    app.include_router(notifications_router)
    app.include_router(realtime_router)

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": __version__,
        }

    return app


# Create app instance
app = create_app()
