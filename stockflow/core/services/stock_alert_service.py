"""
Stock alert service.

Composes the alert evaluator with the notification dispatcher, and wraps
the movement engine so every recorded movement is followed by a live
movement event and a threshold check. Alerting is a soft failure domain:
nothing in it may fail the movement that triggered it.
"""

from stockflow.config import get_logger
from stockflow.core.entities.alert import StockAlert
from stockflow.core.entities.movement import MovementType, StockMovement
from stockflow.core.exceptions import AlertingError
from stockflow.core.interfaces.product_store import IProductStore
from stockflow.core.services.alert_evaluator import AlertEvaluator
from stockflow.core.services.movement_engine import MovementEngine
from stockflow.core.services.notification_dispatcher import NotificationDispatcher

logger = get_logger(__name__)


class StockAlertService:
    """Evaluates stock levels and dispatches alerts."""

    def __init__(
        self,
        engine: MovementEngine,
        evaluator: AlertEvaluator,
        dispatcher: NotificationDispatcher,
        product_store: IProductStore,
    ) -> None:
        self._engine = engine
        self._evaluator = evaluator
        self._dispatcher = dispatcher
        self._product_store = product_store

    async def evaluate_and_alert(self, product_id: int) -> StockAlert | None:
        """
        Check one product and dispatch an alert if it is under-stocked.

        Returns the alert that was dispatched, or None. Never raises.
        """
        try:
            alert = await self._evaluator.evaluate(product_id)
            if alert is not None:
                self._dispatch(alert)
            return alert
        except AlertingError as e:
            logger.error("stock_alert_failed", **e.details)
            return None

    async def record_movement_and_alert(
        self,
        product_id: int,
        movement_type: MovementType | str,
        quantity: int,
        reason: str | None = None,
    ) -> StockMovement:
        """
        Record a movement, then broadcast it and check thresholds.

        Movement errors propagate; alerting errors are logged only.
        """
        movement = await self._engine.record_movement(
            product_id, movement_type, quantity, reason
        )

        try:
            await self._after_movement(movement)
        except AlertingError as e:
            logger.error("post_movement_alerting_failed", movement_id=movement.id, **e.details)

        return movement

    async def _after_movement(self, movement: StockMovement) -> None:
        try:
            product = await self._product_store.get_product(movement.product_id)
        except Exception as e:
            raise AlertingError("lookup", str(e), movement.product_id) from e
        if product is None:
            return

        try:
            self._dispatcher.broadcast_stock_movement(movement, product)
        except Exception as e:
            raise AlertingError("broadcast", str(e), movement.product_id) from e

        alert = self._evaluator.evaluate_product(product)
        if alert is not None:
            self._dispatch(alert)

    def _dispatch(self, alert: StockAlert) -> None:
        logger.info(
            "stock_alert_raised",
            product_id=alert.product_id,
            tier=alert.tier.value,
            condition=alert.condition.value,
            quantity=alert.quantity,
            min_level=alert.min_level,
        )
        try:
            self._dispatcher.dispatch_alert(alert)
        except Exception as e:
            raise AlertingError("dispatch", str(e), alert.product_id) from e
