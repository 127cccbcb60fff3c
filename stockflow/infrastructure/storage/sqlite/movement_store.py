"""SQLite implementation of the movement ledger read side."""

from datetime import datetime, timezone

import aiosqlite

from stockflow.config import get_logger
from stockflow.core.entities.movement import MovementType, MovementTypeAggregate, StockMovement
from stockflow.core.interfaces.movement_store import IMovementLedger
from stockflow.infrastructure.storage.sqlite.connection import get_connection

logger = get_logger(__name__)


def _as_utc_naive(value: datetime) -> datetime:
    # Stored timestamps are naive UTC
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class SQLiteMovementLedger(IMovementLedger):
    """Queries over the append-only stock_movements table."""

    async def list_movements(
        self, limit: int = 100, offset: int = 0
    ) -> list[StockMovement]:
        """List all movements, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def list_by_product(
        self, product_id: int, limit: int | None = None
    ) -> list[StockMovement]:
        """List movements for a product, newest first."""
        query = """
            SELECT * FROM stock_movements
            WHERE product_id = ?
            ORDER BY created_at DESC, id DESC
        """
        params: tuple = (product_id,)
        if limit is not None:
            query += " LIMIT ?"
            params = (product_id, limit)

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def list_between(
        self, start: datetime, end: datetime
    ) -> list[StockMovement]:
        """List movements with start <= created_at <= end, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                WHERE created_at >= ? AND created_at <= ?
                ORDER BY created_at DESC, id DESC
                """,
                (_as_utc_naive(start).isoformat(), _as_utc_naive(end).isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def aggregate_by_type(self, product_id: int) -> list[MovementTypeAggregate]:
        """Count and total quantity per movement type for a product."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT movement_type, COUNT(*) AS count, COALESCE(SUM(quantity), 0) AS total
                FROM stock_movements
                WHERE product_id = ?
                GROUP BY movement_type
                """,
                (product_id,),
            )
            rows = await cursor.fetchall()
            return [
                MovementTypeAggregate(
                    movement_type=MovementType(row["movement_type"]),
                    count=row["count"],
                    total_quantity=row["total"],
                )
                for row in rows
            ]

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockMovement:
        return StockMovement(
            id=row["id"],
            product_id=row["product_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=row["quantity"],
            reason=row["reason"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
