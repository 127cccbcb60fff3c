"""
Dependency injection container for FastAPI.

Provides service instances to route handlers. The service graph and the
live session registry are built once by the application lifespan and kept
on ``app.state``.
"""

from fastapi import Depends, Header, HTTPException, Request, status

from stockflow.application.services import StockServices
from stockflow.application.use_cases import (
    CreateProductUseCase,
    NotificationInboxUseCase,
    RecordMovementUseCase,
    UpdateProductUseCase,
)
from stockflow.core.interfaces import IProductStore
from stockflow.core.services import MovementEngine, NotificationDispatcher, StockAlertService
from stockflow.infrastructure.realtime import SessionRegistry


def get_stock_services(request: Request) -> StockServices:
    """Get the service graph built at startup."""
    return request.app.state.services


def get_session_registry(request: Request) -> SessionRegistry:
    """Get the live session registry built at startup."""
    return request.app.state.registry


# Store dependencies
def get_products(services: StockServices = Depends(get_stock_services)) -> IProductStore:
    return services.product_store


# Service dependencies
def get_engine(services: StockServices = Depends(get_stock_services)) -> MovementEngine:
    return services.engine


def get_alert_service(
    services: StockServices = Depends(get_stock_services),
) -> StockAlertService:
    return services.alert_service


def get_dispatcher(
    services: StockServices = Depends(get_stock_services),
) -> NotificationDispatcher:
    return services.dispatcher


# Use case dependencies
def get_create_product_use_case(
    services: StockServices = Depends(get_stock_services),
) -> CreateProductUseCase:
    return CreateProductUseCase(
        product_store=services.product_store,
        alert_service=services.alert_service,
        dispatcher=services.dispatcher,
    )


def get_update_product_use_case(
    services: StockServices = Depends(get_stock_services),
) -> UpdateProductUseCase:
    return UpdateProductUseCase(
        product_store=services.product_store,
        alert_service=services.alert_service,
        dispatcher=services.dispatcher,
    )


def get_record_movement_use_case(
    services: StockServices = Depends(get_stock_services),
) -> RecordMovementUseCase:
    return RecordMovementUseCase(alert_service=services.alert_service)


def get_inbox_use_case(
    services: StockServices = Depends(get_stock_services),
) -> NotificationInboxUseCase:
    return NotificationInboxUseCase(notification_store=services.notification_store)


# Caller identity
def get_current_user_id(
    user_id: int | None = Header(default=None, alias="X-User-Id"),
) -> int:
    """Caller's user id from the X-User-Id header."""
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-User-Id header is required",
        )
    return user_id
