"""
Stock movement engine.

Turns an inventory event into a new authoritative product quantity and an
immutable ledger row, written together in one transaction. Read-compute-write
for a product is serialized twice over: an in-process lock per product id,
and the store's write transaction.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from stockflow.config import get_logger
from stockflow.core.entities.movement import (
    MovementDirection,
    MovementTotals,
    MovementType,
    StockMovement,
)
from stockflow.core.exceptions import (
    InsufficientStockError,
    InvalidMovementQuantityError,
    ProductNotFoundError,
    ValidationError,
)
from stockflow.core.interfaces.inventory_store import IInventoryStore
from stockflow.core.interfaces.movement_store import IMovementLedger

logger = get_logger(__name__)


def _validate_quantity(quantity: Any) -> int:
    # bool is an int subclass; True must not pass as 1
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidMovementQuantityError(quantity)
    return quantity


def _clean_reason(reason: str | None) -> str | None:
    if reason is None:
        return None
    reason = reason.strip()
    return reason or None


class _ProductLocks:
    """Per-product asyncio locks, dropped once nobody holds or waits on them."""

    def __init__(self) -> None:
        self._locks: dict[int, asyncio.Lock] = {}
        self._users: dict[int, int] = {}

    @asynccontextmanager
    async def hold(self, product_id: int) -> AsyncIterator[None]:
        lock = self._locks.setdefault(product_id, asyncio.Lock())
        self._users[product_id] = self._users.get(product_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[product_id] -= 1
            if self._users[product_id] == 0:
                del self._users[product_id]
                del self._locks[product_id]

    def __len__(self) -> int:
        return len(self._locks)


class MovementEngine:
    """
    Records stock movements against the quantity store.

    Direction table:
        purchase, return  -> quantity + n
        sale, damage      -> quantity - n
        adjustment        -> n (absolute; the ledger stores the result)

    A movement that would leave quantity negative is rejected with
    InsufficientStockError and writes nothing.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore,
        ledger: IMovementLedger,
    ) -> None:
        self._inventory_store = inventory_store
        self._ledger = ledger
        self._locks = _ProductLocks()

    async def record_movement(
        self,
        product_id: int,
        movement_type: MovementType | str,
        quantity: int,
        reason: str | None = None,
    ) -> StockMovement:
        """
        Record a movement and update the product's quantity atomically.

        Args:
            product_id: Product the movement applies to.
            movement_type: One of the five movement kinds (enum or its value).
            quantity: Positive integer; a delta, or the new absolute
                quantity for adjustments.
            reason: Optional free text.

        Returns:
            The persisted StockMovement.

        Raises:
            InvalidMovementTypeError, InvalidMovementQuantityError,
            ProductNotFoundError, InsufficientStockError, DatabaseError.
        """
        movement_type = MovementType.parse(movement_type)
        quantity = _validate_quantity(quantity)

        async with self._locks.hold(product_id):
            async with self._inventory_store.stock_transaction() as tx:
                product = await tx.get_product(product_id)
                if product is None:
                    raise ProductNotFoundError(product_id)

                previous = product.quantity
                new_quantity = movement_type.apply(previous, quantity)
                if new_quantity < 0:
                    logger.info(
                        "stock_movement_rejected",
                        product_id=product_id,
                        type=movement_type.value,
                        current=previous,
                        requested=quantity,
                    )
                    raise InsufficientStockError(product_id, previous, quantity)

                recorded_quantity = (
                    new_quantity
                    if movement_type.direction is MovementDirection.ABSOLUTE
                    else quantity
                )
                movement = await tx.append_movement(
                    StockMovement(
                        product_id=product_id,
                        movement_type=movement_type,
                        quantity=recorded_quantity,
                        reason=_clean_reason(reason),
                        created_at=datetime.utcnow(),
                    )
                )
                await tx.set_quantity(product_id, new_quantity)

        logger.info(
            "stock_movement_applied",
            product_id=product_id,
            movement_id=movement.id,
            type=movement_type.value,
            previous_qty=previous,
            new_qty=new_quantity,
        )
        return movement

    # Ledger queries

    async def list_movements(self, limit: int = 100, offset: int = 0) -> list[StockMovement]:
        return await self._ledger.list_movements(limit=limit, offset=offset)

    async def list_product_movements(self, product_id: int) -> list[StockMovement]:
        return await self._ledger.list_by_product(product_id)

    async def list_movements_between(
        self, start: datetime, end: datetime
    ) -> list[StockMovement]:
        if start > end:
            raise ValidationError("start", "start must not be after end", start)
        return await self._ledger.list_between(start, end)

    async def summarize_movements(self, product_id: int) -> dict[MovementType, int]:
        """Number of movements per type for a product; every type is present."""
        summary = {movement_type: 0 for movement_type in MovementType}
        for aggregate in await self._ledger.aggregate_by_type(product_id):
            summary[aggregate.movement_type] = aggregate.count
        return summary

    async def movement_totals(self, product_id: int) -> MovementTotals:
        """
        Total inbound and outbound flow for a product.

        Adjustments are excluded: they restate a level, they are not a flow.
        """
        total_in = 0
        total_out = 0
        for aggregate in await self._ledger.aggregate_by_type(product_id):
            direction = aggregate.movement_type.direction
            if direction is MovementDirection.INBOUND:
                total_in += aggregate.total_quantity
            elif direction is MovementDirection.OUTBOUND:
                total_out += aggregate.total_quantity
        return MovementTotals(total_in=total_in, total_out=total_out)
