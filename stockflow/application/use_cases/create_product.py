"""Create Product Use Case: new product with its opening stock booked as a purchase."""

from stockflow.application.dto.requests import CreateProductRequest
from stockflow.config import get_logger
from stockflow.core.entities.movement import MovementType
from stockflow.core.entities.product import Product
from stockflow.core.exceptions import DuplicateSkuError, ProductNotFoundError
from stockflow.core.interfaces.product_store import IProductStore
from stockflow.core.services.notification_dispatcher import NotificationDispatcher
from stockflow.core.services.stock_alert_service import StockAlertService

logger = get_logger(__name__)

INITIAL_STOCK_REASON = "Initial stock"


class CreateProductUseCase:
    """
    Create a product.

    The row is inserted with quantity 0. A positive requested quantity is
    then recorded through the movement engine, so the ledger accounts for
    every unit on hand. If that movement fails the row is deleted again.
    """

    def __init__(
        self,
        product_store: IProductStore,
        alert_service: StockAlertService,
        dispatcher: NotificationDispatcher,
    ):
        self._product_store = product_store
        self._alert_service = alert_service
        self._dispatcher = dispatcher

    async def execute(self, request: CreateProductRequest) -> Product:
        """Execute create product use case."""
        sku = request.sku.strip()
        existing = await self._product_store.get_by_sku(sku)
        if existing is not None:
            raise DuplicateSkuError(sku, existing.id)

        product = await self._product_store.create_product(
            Product(
                sku=sku,
                name=request.name.strip(),
                description=request.description,
                category_id=request.category_id,
                quantity=0,
                min_stock_level=request.min_stock_level,
                unit_price=request.unit_price,
            )
        )
        product_id: int = product.id  # type: ignore[assignment]

        if request.quantity > 0:
            try:
                await self._alert_service.record_movement_and_alert(
                    product_id,
                    MovementType.PURCHASE,
                    request.quantity,
                    INITIAL_STOCK_REASON,
                )
            except Exception as e:
                logger.error(
                    "opening_stock_failed",
                    product_id=product_id,
                    sku=sku,
                    error=str(e),
                )
                await self._product_store.delete_product(product_id)
                raise
            refreshed = await self._product_store.get_product(product_id)
            if refreshed is None:
                raise ProductNotFoundError(product_id)
            product = refreshed
        else:
            # No movement was recorded, so check the threshold here
            await self._alert_service.evaluate_and_alert(product_id)

        self._dispatcher.broadcast_product_update(product, "created")
        logger.info(
            "product_create_complete",
            product_id=product_id,
            sku=product.sku,
            quantity=product.quantity,
        )
        return product
