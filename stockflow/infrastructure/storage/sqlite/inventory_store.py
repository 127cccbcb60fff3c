"""SQLite implementation of the stock write transaction."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

import aiosqlite

from stockflow.config import get_logger
from stockflow.core.entities.movement import StockMovement
from stockflow.core.entities.product import Product
from stockflow.core.exceptions import DatabaseError
from stockflow.core.interfaces.inventory_store import IInventoryStore, IStockTransaction
from stockflow.infrastructure.storage.sqlite.connection import get_transaction
from stockflow.infrastructure.storage.sqlite.product_store import SQLiteProductStore

logger = get_logger(__name__)


class SQLiteStockTransaction(IStockTransaction):
    """Quantity and ledger writes bound to one open connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get_product(self, product_id: int) -> Product | None:
        cursor = await self._conn.execute(
            "SELECT * FROM products WHERE id = ?", (product_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return SQLiteProductStore._row_to_product(row)

    async def append_movement(self, movement: StockMovement) -> StockMovement:
        cursor = await self._conn.execute(
            """
            INSERT INTO stock_movements (
                product_id, movement_type, quantity, reason, created_at
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (
                movement.product_id,
                movement.movement_type.value,
                movement.quantity,
                movement.reason,
                movement.created_at.isoformat(),
            ),
        )
        movement.id = cursor.lastrowid
        logger.debug(
            "stock_movement_recorded",
            movement_id=movement.id,
            product_id=movement.product_id,
            type=movement.movement_type.value,
            qty=movement.quantity,
        )
        return movement

    async def set_quantity(self, product_id: int, quantity: int) -> None:
        await self._conn.execute(
            "UPDATE products SET quantity = ?, updated_at = ? WHERE id = ?",
            (quantity, datetime.utcnow().isoformat(), product_id),
        )


class SQLiteInventoryStore(IInventoryStore):
    """Runs stock writes inside a BEGIN IMMEDIATE transaction."""

    @asynccontextmanager
    async def stock_transaction(self) -> AsyncIterator[SQLiteStockTransaction]:
        try:
            async with get_transaction(immediate=True) as conn:
                yield SQLiteStockTransaction(conn)
        except aiosqlite.Error as e:
            logger.error("stock_transaction_failed", error=str(e))
            raise DatabaseError("stock_transaction", str(e)) from e
