"""Update Product Use Case: edit product details, never its quantity."""

from stockflow.application.dto.requests import UpdateProductRequest
from stockflow.config import get_logger
from stockflow.core.entities.product import Product
from stockflow.core.exceptions import (
    DuplicateSkuError,
    ProductNotFoundError,
    QuantityUpdateNotAllowedError,
)
from stockflow.core.interfaces.product_store import IProductStore
from stockflow.core.services.notification_dispatcher import NotificationDispatcher
from stockflow.core.services.stock_alert_service import StockAlertService

logger = get_logger(__name__)


class UpdateProductUseCase:
    """Apply a partial update and re-check the stock threshold."""

    def __init__(
        self,
        product_store: IProductStore,
        alert_service: StockAlertService,
        dispatcher: NotificationDispatcher,
    ):
        self._product_store = product_store
        self._alert_service = alert_service
        self._dispatcher = dispatcher

    async def execute(self, product_id: int, request: UpdateProductRequest) -> Product:
        """Execute update product use case."""
        if request.quantity is not None:
            raise QuantityUpdateNotAllowedError(product_id)

        product = await self._product_store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        changes = request.model_dump(exclude_unset=True, exclude={"quantity"})
        if "sku" in changes and changes["sku"] is not None:
            changes["sku"] = changes["sku"].strip()
            if changes["sku"] != product.sku:
                existing = await self._product_store.get_by_sku(changes["sku"])
                if existing is not None and existing.id != product_id:
                    raise DuplicateSkuError(changes["sku"], existing.id)

        for field, value in changes.items():
            # Only description and category_id can be cleared
            if value is None and field not in ("description", "category_id"):
                continue
            setattr(product, field, value)

        product = await self._product_store.update_product(product)
        self._dispatcher.broadcast_product_update(product, "updated")
        logger.info("product_update_complete", product_id=product_id, fields=sorted(changes))

        if "min_stock_level" in changes:
            await self._alert_service.evaluate_and_alert(product_id)

        return product
