"""
Service factory functions for dependency injection.

Wires the SQLite stores and the live broadcaster to the core services.
The application lifespan builds one ``StockServices`` per process and keeps
it on ``app.state``; API dependencies read it from there.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stockflow.config import Settings, get_settings
from stockflow.core.services import (
    AlertEvaluator,
    MovementEngine,
    NotificationDispatcher,
    StockAlertService,
    StockSweeper,
)

if TYPE_CHECKING:
    from stockflow.core.interfaces import (
        IBroadcaster,
        IInventoryStore,
        IMovementLedger,
        INotificationStore,
        IProductStore,
    )


@dataclass
class StockServices:
    """Core services sharing one set of stores and one dispatcher."""

    product_store: "IProductStore"
    notification_store: "INotificationStore"
    engine: MovementEngine
    evaluator: AlertEvaluator
    dispatcher: NotificationDispatcher
    alert_service: StockAlertService
    sweeper: StockSweeper


async def build_stock_services(
    broadcaster: "IBroadcaster | None" = None,
    settings: Settings | None = None,
    product_store: "IProductStore | None" = None,
    inventory_store: "IInventoryStore | None" = None,
    movement_ledger: "IMovementLedger | None" = None,
    notification_store: "INotificationStore | None" = None,
) -> StockServices:
    """
    Build the stock services graph.

    Stores default to the SQLite singletons. Without a broadcaster, live
    delivery is disabled and only persisted notifications are produced.

    Args:
        broadcaster: Live transport for pushes
        settings: Settings override (default: global settings)
        product_store: Optional product store override
        inventory_store: Optional inventory store override
        movement_ledger: Optional movement ledger override
        notification_store: Optional notification store override

    Returns:
        Configured StockServices
    """
    settings = settings or get_settings()

    # Lazy import infrastructure
    from stockflow.infrastructure.storage.sqlite import (
        get_inventory_store,
        get_movement_ledger,
        get_notification_store,
        get_product_store,
    )

    product_store = product_store or await get_product_store()
    inventory_store = inventory_store or await get_inventory_store()
    movement_ledger = movement_ledger or await get_movement_ledger()
    notification_store = notification_store or await get_notification_store()

    engine = MovementEngine(inventory_store=inventory_store, ledger=movement_ledger)
    evaluator = AlertEvaluator(
        product_store=product_store,
        critical_ratio=settings.alerts.critical_ratio,
    )
    dispatcher = NotificationDispatcher(
        notification_store=notification_store,
        broadcaster=broadcaster,
        recipients=settings.alerts.recipient_user_ids,
    )
    alert_service = StockAlertService(
        engine=engine,
        evaluator=evaluator,
        dispatcher=dispatcher,
        product_store=product_store,
    )
    sweeper = StockSweeper(
        product_store=product_store,
        alert_service=alert_service,
        interval_minutes=settings.alerts.sweep_interval_minutes,
        page_size=settings.alerts.sweep_page_size,
    )

    return StockServices(
        product_store=product_store,
        notification_store=notification_store,
        engine=engine,
        evaluator=evaluator,
        dispatcher=dispatcher,
        alert_service=alert_service,
        sweeper=sweeper,
    )
