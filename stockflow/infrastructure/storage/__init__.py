"""Storage infrastructure implementations."""

from stockflow.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteMovementLedger,
    SQLiteNotificationStore,
    SQLiteProductStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteProductStore",
    "SQLiteInventoryStore",
    "SQLiteMovementLedger",
    "SQLiteNotificationStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
