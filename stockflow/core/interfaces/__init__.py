"""Core interfaces (ports) for dependency injection."""

from stockflow.core.interfaces.broadcaster import GLOBAL_TOPIC, IBroadcaster, user_topic
from stockflow.core.interfaces.inventory_store import IInventoryStore, IStockTransaction
from stockflow.core.interfaces.movement_store import IMovementLedger
from stockflow.core.interfaces.notification_store import INotificationStore
from stockflow.core.interfaces.product_store import IProductStore

__all__ = [
    "GLOBAL_TOPIC",
    "IBroadcaster",
    "IInventoryStore",
    "IMovementLedger",
    "INotificationStore",
    "IProductStore",
    "IStockTransaction",
    "user_topic",
]
