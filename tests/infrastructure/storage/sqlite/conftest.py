"""Pytest fixtures for SQLite storage tests."""

import pytest

from stockflow.core.entities import Product
from stockflow.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteMovementLedger,
    SQLiteNotificationStore,
    SQLiteProductStore,
)


@pytest.fixture
def product_store(sqlite_pool) -> SQLiteProductStore:
    return SQLiteProductStore()


@pytest.fixture
def inventory_store(sqlite_pool) -> SQLiteInventoryStore:
    return SQLiteInventoryStore()


@pytest.fixture
def movement_ledger(sqlite_pool) -> SQLiteMovementLedger:
    return SQLiteMovementLedger()


@pytest.fixture
def notification_store(sqlite_pool) -> SQLiteNotificationStore:
    return SQLiteNotificationStore()


@pytest.fixture
async def stored_product(product_store) -> Product:
    """Widget persisted with 100 on hand and a minimum of 20."""
    return await product_store.create_product(
        Product(sku="WID-001", name="Widget", quantity=100, min_stock_level=20, unit_price=2.5)
    )
