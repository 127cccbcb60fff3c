"""Tests for the periodic stock sweep."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from stockflow.core.entities import Product
from stockflow.core.services import StockSweeper


def _products(count: int) -> list[Product]:
    return [
        Product(id=i, sku=f"SKU-{i}", name=f"Item {i}", quantity=i, min_stock_level=3)
        for i in range(1, count + 1)
    ]


def _paged_store(products: list[Product]) -> AsyncMock:
    store = AsyncMock()

    async def list_products(filters=None, limit=100, offset=0):
        return products[offset : offset + limit]

    store.list_products.side_effect = list_products
    return store


@pytest.fixture
def alert_service():
    mock = AsyncMock()
    # Items 1 and 2 are below the minimum of 3
    mock.evaluate_and_alert.side_effect = lambda pid: object() if pid < 3 else None
    return mock


class TestRunOnce:
    async def test_pages_through_all_products(self, alert_service):
        store = _paged_store(_products(5))
        sweeper = StockSweeper(store, alert_service, page_size=2)

        result = await sweeper.run_once()

        assert result.checked == 5
        assert result.alerts == 2
        assert result.completed is True
        offsets = [c.kwargs["offset"] for c in store.list_products.call_args_list]
        assert offsets == [0, 2, 4]

    async def test_full_last_page_triggers_one_more_fetch(self, alert_service):
        store = _paged_store(_products(4))
        sweeper = StockSweeper(store, alert_service, page_size=2)

        result = await sweeper.run_once()

        assert result.checked == 4
        assert store.list_products.await_count == 3

    async def test_empty_catalog(self, alert_service):
        sweeper = StockSweeper(_paged_store([]), alert_service)

        result = await sweeper.run_once()

        assert result.checked == 0
        alert_service.evaluate_and_alert.assert_not_awaited()

    async def test_listing_failure_marks_incomplete(self, alert_service):
        store = AsyncMock()
        store.list_products.side_effect = RuntimeError("database is locked")
        sweeper = StockSweeper(store, alert_service)

        result = await sweeper.run_once()

        assert result.completed is False
        assert result.checked == 0


class TestSchedule:
    def test_rejects_non_positive_interval(self, alert_service):
        with pytest.raises(ValueError):
            StockSweeper(AsyncMock(), alert_service, interval_minutes=0)

    def test_interval_in_seconds(self, alert_service):
        sweeper = StockSweeper(AsyncMock(), alert_service, interval_minutes=5)
        assert sweeper.interval_seconds == 300

    async def test_start_and_stop(self, alert_service):
        store = _paged_store(_products(1))
        sweeper = StockSweeper(store, alert_service, interval_minutes=0.001)

        sweeper.start()
        assert sweeper.running
        await asyncio.sleep(0.2)
        await sweeper.stop()

        assert not sweeper.running
        assert store.list_products.await_count >= 1

    async def test_stop_without_start(self, alert_service):
        sweeper = StockSweeper(AsyncMock(), alert_service)
        await sweeper.stop()
        assert not sweeper.running
