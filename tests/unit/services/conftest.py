"""In-memory store doubles for core service tests."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

import pytest

from stockflow.core.entities import (
    MovementType,
    MovementTypeAggregate,
    Product,
    ProductFilter,
    StockMovement,
)
from stockflow.core.interfaces import (
    IInventoryStore,
    IMovementLedger,
    IProductStore,
    IStockTransaction,
)


class _StagedTransaction(IStockTransaction):
    """Buffers writes; the owner applies them only on commit."""

    def __init__(self, store: "InMemoryInventory"):
        self._store = store
        self.movements: list[StockMovement] = []
        self.quantities: dict[int, int] = {}

    async def get_product(self, product_id: int) -> Product | None:
        product = self._store.products.get(product_id)
        if product is None:
            return None
        return product.model_copy()

    async def append_movement(self, movement: StockMovement) -> StockMovement:
        movement.id = self._store.next_movement_id + len(self.movements)
        self.movements.append(movement)
        return movement

    async def set_quantity(self, product_id: int, quantity: int) -> None:
        self.quantities[product_id] = quantity


class InMemoryInventory(IInventoryStore, IMovementLedger, IProductStore):
    """Products, quantities and ledger held in dicts, with commit/rollback."""

    def __init__(self) -> None:
        self.products: dict[int, Product] = {}
        self.movements: list[StockMovement] = []
        self.next_movement_id = 1
        self.fail_on_set_quantity = False

    def add(self, product: Product) -> Product:
        if product.id is None:
            product.id = len(self.products) + 1
        self.products[product.id] = product
        return product

    @asynccontextmanager
    async def stock_transaction(self) -> AsyncIterator[_StagedTransaction]:
        tx = _StagedTransaction(self)
        yield tx
        if self.fail_on_set_quantity and tx.quantities:
            raise RuntimeError("disk full")
        self.movements.extend(tx.movements)
        self.next_movement_id += len(tx.movements)
        for product_id, quantity in tx.quantities.items():
            self.products[product_id].quantity = quantity

    # IProductStore
    async def create_product(self, product: Product) -> Product:
        return self.add(product)

    async def get_product(self, product_id: int) -> Product | None:
        product = self.products.get(product_id)
        return product.model_copy() if product else None

    async def get_by_sku(self, sku: str) -> Product | None:
        for product in self.products.values():
            if product.sku == sku:
                return product.model_copy()
        return None

    async def update_product(self, product: Product) -> Product:
        self.products[product.id] = product  # type: ignore[index]
        return product

    async def delete_product(self, product_id: int) -> bool:
        self.movements = [m for m in self.movements if m.product_id != product_id]
        return self.products.pop(product_id, None) is not None

    async def list_products(
        self,
        filters: ProductFilter | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        products = sorted(self.products.values(), key=lambda p: p.id or 0)
        if filters is not None and filters.low_stock:
            products = [p for p in products if p.quantity <= p.min_stock_level]
        return [p.model_copy() for p in products[offset : offset + limit]]

    async def list_low_stock(self, limit: int = 100, offset: int = 0) -> list[Product]:
        return await self.list_products(ProductFilter(low_stock=True), limit, offset)

    # IMovementLedger
    async def list_movements(self, limit: int = 100, offset: int = 0) -> list[StockMovement]:
        return list(reversed(self.movements))[offset : offset + limit]

    async def list_by_product(
        self, product_id: int, limit: int | None = None
    ) -> list[StockMovement]:
        rows = [m for m in reversed(self.movements) if m.product_id == product_id]
        return rows if limit is None else rows[:limit]

    async def list_between(self, start: datetime, end: datetime) -> list[StockMovement]:
        return [m for m in reversed(self.movements) if start <= m.created_at <= end]

    async def aggregate_by_type(self, product_id: int) -> list[MovementTypeAggregate]:
        counts: dict[MovementType, list[int]] = {}
        for movement in self.movements:
            if movement.product_id != product_id:
                continue
            entry = counts.setdefault(movement.movement_type, [0, 0])
            entry[0] += 1
            entry[1] += movement.quantity
        return [
            MovementTypeAggregate(movement_type=t, count=c, total_quantity=q)
            for t, (c, q) in counts.items()
        ]


@pytest.fixture
def inventory() -> InMemoryInventory:
    return InMemoryInventory()
