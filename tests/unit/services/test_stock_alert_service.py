"""Tests for movement-triggered alerting."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from stockflow.core.entities import MovementType, Product, StockCondition, StockMovement
from stockflow.core.exceptions import InsufficientStockError
from stockflow.core.services import AlertEvaluator, StockAlertService, stock_alert_service


@pytest.fixture
def engine():
    mock = MagicMock()
    mock.record_movement = AsyncMock(
        return_value=StockMovement(
            id=11, product_id=1, movement_type=MovementType.SALE, quantity=90
        )
    )
    return mock


@pytest.fixture
def product_store():
    return AsyncMock()


@pytest.fixture
def dispatcher():
    return MagicMock()


@pytest.fixture
def service(engine, product_store, dispatcher):
    return StockAlertService(
        engine=engine,
        evaluator=AlertEvaluator(product_store),
        dispatcher=dispatcher,
        product_store=product_store,
    )


def _product(quantity: int) -> Product:
    return Product(id=1, sku="WID-001", name="Widget", quantity=quantity, min_stock_level=20)


class TestRecordMovementAndAlert:
    async def test_low_stock_after_sale_dispatches_alert(
        self, service, engine, product_store, dispatcher
    ):
        product_store.get_product.return_value = _product(10)

        movement = await service.record_movement_and_alert(1, "sale", 90)

        assert movement.id == 11
        engine.record_movement.assert_awaited_once_with(1, "sale", 90, None)
        dispatcher.broadcast_stock_movement.assert_called_once()
        alert = dispatcher.dispatch_alert.call_args.args[0]
        assert alert.condition is StockCondition.LOW_STOCK
        assert alert.quantity == 10

    async def test_healthy_stock_only_broadcasts_movement(
        self, service, product_store, dispatcher
    ):
        product_store.get_product.return_value = _product(80)

        await service.record_movement_and_alert(1, "purchase", 5)

        dispatcher.broadcast_stock_movement.assert_called_once()
        dispatcher.dispatch_alert.assert_not_called()

    async def test_movement_error_propagates(self, service, engine, dispatcher):
        engine.record_movement.side_effect = InsufficientStockError(1, 10, 20)

        with pytest.raises(InsufficientStockError):
            await service.record_movement_and_alert(1, "sale", 20)

        dispatcher.broadcast_stock_movement.assert_not_called()
        dispatcher.dispatch_alert.assert_not_called()

    async def test_alerting_failure_keeps_movement(self, service, product_store, dispatcher):
        product_store.get_product.side_effect = RuntimeError("database is locked")

        movement = await service.record_movement_and_alert(1, "sale", 90)

        assert movement.id == 11
        dispatcher.dispatch_alert.assert_not_called()

    async def test_dispatcher_failure_keeps_movement(self, service, product_store, dispatcher):
        product_store.get_product.return_value = _product(0)
        dispatcher.dispatch_alert.side_effect = RuntimeError("no running loop")

        movement = await service.record_movement_and_alert(1, "sale", 90)

        assert movement.id == 11


class TestEvaluateAndAlert:
    async def test_returns_dispatched_alert(self, service, product_store, dispatcher):
        product_store.get_product.return_value = _product(2)

        alert = await service.evaluate_and_alert(1)

        assert alert.condition is StockCondition.CRITICALLY_LOW
        dispatcher.dispatch_alert.assert_called_once_with(alert)

    async def test_no_alert_for_healthy_stock(self, service, product_store, dispatcher):
        product_store.get_product.return_value = _product(50)

        assert await service.evaluate_and_alert(1) is None
        dispatcher.dispatch_alert.assert_not_called()

    async def test_never_raises(self, service, product_store, dispatcher):
        product_store.get_product.return_value = _product(0)
        dispatcher.dispatch_alert.side_effect = RuntimeError("boom")

        assert await service.evaluate_and_alert(1) is None


class TestAlertingBoundary:
    async def test_lookup_failure_logged_with_stage(self, service, product_store):
        product_store.get_product.side_effect = RuntimeError("database is locked")

        with patch.object(stock_alert_service, "logger") as logger:
            await service.record_movement_and_alert(1, "sale", 90)

        event, = logger.error.call_args.args
        assert event == "post_movement_alerting_failed"
        assert logger.error.call_args.kwargs == {
            "movement_id": 11,
            "stage": "lookup",
            "reason": "database is locked",
            "product_id": 1,
        }

    async def test_dispatch_failure_logged_with_stage(self, service, product_store, dispatcher):
        product_store.get_product.return_value = _product(0)
        dispatcher.dispatch_alert.side_effect = RuntimeError("no running loop")

        with patch.object(stock_alert_service, "logger") as logger:
            assert await service.evaluate_and_alert(1) is None

        logger.error.assert_called_once_with(
            "stock_alert_failed", stage="dispatch", reason="no running loop", product_id=1
        )
