"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stockflow import __version__
from stockflow.api.dependencies import get_session_registry, get_stock_services
from stockflow.application.dto.responses import ComponentHealthResponse, HealthResponse
from stockflow.application.services import StockServices
from stockflow.infrastructure.realtime import SessionRegistry

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    services: StockServices = Depends(get_stock_services),
    registry: SessionRegistry = Depends(get_session_registry),
) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime, sweep state and live session count.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        sweep_running=services.sweeper.running,
        live_sessions=registry.count(),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from stockflow.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        latency = (time.time() - start) * 1000
        db_status = ComponentHealthResponse(status="available", detail=f"{latency:.2f}ms")

    except Exception as e:
        db_status = ComponentHealthResponse(status="unavailable", detail=str(e))

    return HealthResponse(
        status="healthy" if db_status.status == "available" else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
