"""
Stock alert evaluator.

Classifies a product's on-hand quantity against its minimum stock level.
Rules are checked in order and the first match wins:

1. quantity == 0                          -> critical, out of stock
2. quantity <  min_level * critical_ratio -> critical, critically low
3. quantity <  min_level                  -> warning, low stock

A product with min_level 0 therefore only alerts at exactly zero.
"""

from stockflow.config import get_logger
from stockflow.core.entities.alert import StockAlert, StockCondition
from stockflow.core.entities.product import Product
from stockflow.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)

DEFAULT_CRITICAL_RATIO = 0.2


def classify_stock_level(
    quantity: int,
    min_level: int,
    critical_ratio: float = DEFAULT_CRITICAL_RATIO,
) -> StockCondition | None:
    """Return the matching stock condition, or None when stock is healthy."""
    if quantity == 0:
        return StockCondition.OUT_OF_STOCK
    if quantity < min_level * critical_ratio:
        return StockCondition.CRITICALLY_LOW
    if quantity < min_level:
        return StockCondition.LOW_STOCK
    return None


class AlertEvaluator:
    """Evaluates products for low-stock alerts. Never raises."""

    def __init__(
        self,
        product_store: IProductStore,
        critical_ratio: float = DEFAULT_CRITICAL_RATIO,
    ) -> None:
        self._product_store = product_store
        self._critical_ratio = critical_ratio

    async def evaluate(self, product_id: int) -> StockAlert | None:
        """Look up a product and classify it; lookup failures mean no alert."""
        try:
            product = await self._product_store.get_product(product_id)
        except Exception as e:
            logger.warning(
                "stock_evaluation_lookup_failed",
                product_id=product_id,
                error=str(e),
            )
            return None

        if product is None:
            logger.debug("stock_evaluation_product_missing", product_id=product_id)
            return None

        return self.evaluate_product(product)

    def evaluate_product(self, product: Product) -> StockAlert | None:
        """Classify an already-loaded product."""
        condition = classify_stock_level(
            product.quantity, product.min_stock_level, self._critical_ratio
        )
        if condition is None or product.id is None:
            return None

        return StockAlert(
            product_id=product.id,
            product_name=product.name,
            condition=condition,
            quantity=product.quantity,
            min_level=product.min_stock_level,
        )
