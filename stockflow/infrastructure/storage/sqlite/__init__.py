"""SQLite storage implementations."""

from stockflow.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from stockflow.infrastructure.storage.sqlite.inventory_store import (
    SQLiteInventoryStore,
    SQLiteStockTransaction,
)
from stockflow.infrastructure.storage.sqlite.movement_store import SQLiteMovementLedger
from stockflow.infrastructure.storage.sqlite.notification_store import SQLiteNotificationStore
from stockflow.infrastructure.storage.sqlite.product_store import SQLiteProductStore

# Singleton instances
_product_store: SQLiteProductStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_movement_ledger: SQLiteMovementLedger | None = None
_notification_store: SQLiteNotificationStore | None = None


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_movement_ledger() -> SQLiteMovementLedger:
    """Get singleton movement ledger instance."""
    global _movement_ledger
    if _movement_ledger is None:
        _movement_ledger = SQLiteMovementLedger()
    return _movement_ledger


async def get_notification_store() -> SQLiteNotificationStore:
    """Get singleton notification store instance."""
    global _notification_store
    if _notification_store is None:
        _notification_store = SQLiteNotificationStore()
    return _notification_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteProductStore",
    "SQLiteInventoryStore",
    "SQLiteStockTransaction",
    "SQLiteMovementLedger",
    "SQLiteNotificationStore",
    # Factory functions
    "get_product_store",
    "get_inventory_store",
    "get_movement_ledger",
    "get_notification_store",
]
