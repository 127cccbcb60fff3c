"""Core domain entities."""

from stockflow.core.entities.alert import AlertTier, StockAlert, StockCondition
from stockflow.core.entities.movement import (
    MovementDirection,
    MovementTotals,
    MovementType,
    MovementTypeAggregate,
    StockMovement,
)
from stockflow.core.entities.notification import Notification, NotificationType
from stockflow.core.entities.product import Product, ProductFilter

__all__ = [
    # Products
    "Product",
    "ProductFilter",
    # Movements
    "MovementDirection",
    "MovementType",
    "MovementTotals",
    "MovementTypeAggregate",
    "StockMovement",
    # Alerts
    "AlertTier",
    "StockAlert",
    "StockCondition",
    # Notifications
    "Notification",
    "NotificationType",
]
