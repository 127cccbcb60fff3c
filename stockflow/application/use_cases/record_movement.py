"""Record Movement Use Case: stock movement followed by live events and alerting."""

from stockflow.application.dto.requests import RecordMovementRequest
from stockflow.config import get_logger
from stockflow.core.entities.movement import StockMovement
from stockflow.core.services.stock_alert_service import StockAlertService

logger = get_logger(__name__)


class RecordMovementUseCase:
    """Record a stock movement through the alerting wrapper."""

    def __init__(self, alert_service: StockAlertService):
        self._alert_service = alert_service

    async def execute(self, request: RecordMovementRequest) -> StockMovement:
        """
        Execute record movement use case.

        Movement errors (unknown product, bad type or quantity, insufficient
        stock) propagate unchanged. Alerting runs after the commit and cannot
        fail the request.
        """
        logger.info(
            "record_movement_started",
            product_id=request.product_id,
            type=request.movement_type,
            quantity=request.quantity,
        )
        return await self._alert_service.record_movement_and_alert(
            request.product_id,
            request.movement_type,
            request.quantity,
            request.reason,
        )
