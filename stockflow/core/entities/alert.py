"""Stock alert classification entities."""

from dataclasses import dataclass
from enum import Enum

from stockflow.core.entities.notification import NotificationType


class AlertTier(str, Enum):
    """Severity of a low-stock condition."""

    WARNING = "warning"
    CRITICAL = "critical"


class StockCondition(str, Enum):
    """Which threshold rule matched."""

    OUT_OF_STOCK = "out_of_stock"
    CRITICALLY_LOW = "critically_low"
    LOW_STOCK = "low_stock"

    @property
    def tier(self) -> AlertTier:
        if self is StockCondition.LOW_STOCK:
            return AlertTier.WARNING
        return AlertTier.CRITICAL

    @property
    def notification_type(self) -> NotificationType:
        return _CONDITION_NOTIFICATION_TYPES[self]


_CONDITION_NOTIFICATION_TYPES = {
    StockCondition.OUT_OF_STOCK: NotificationType.STOCK_OUT,
    StockCondition.CRITICALLY_LOW: NotificationType.STOCK_CRITICAL,
    StockCondition.LOW_STOCK: NotificationType.STOCK_LOW,
}


@dataclass(frozen=True)
class StockAlert:
    """Result of evaluating a product against its minimum stock level."""

    product_id: int
    product_name: str
    condition: StockCondition
    quantity: int
    min_level: int

    @property
    def tier(self) -> AlertTier:
        return self.condition.tier

    @property
    def notification_type(self) -> NotificationType:
        return self.condition.notification_type

    @property
    def title(self) -> str:
        if self.condition is StockCondition.OUT_OF_STOCK:
            return f"Out of Stock: {self.product_name}"
        if self.condition is StockCondition.CRITICALLY_LOW:
            return f"Critical Stock: {self.product_name}"
        return f"Low Stock: {self.product_name}"

    @property
    def message(self) -> str:
        if self.condition is StockCondition.OUT_OF_STOCK:
            return f'Product "{self.product_name}" is out of stock!'
        if self.condition is StockCondition.CRITICALLY_LOW:
            return (
                f'Product "{self.product_name}" is critically low '
                f"({self.quantity} units, minimum {self.min_level})"
            )
        return (
            f'Product "{self.product_name}" has {self.quantity} units, '
            f"below minimum level of {self.min_level}"
        )

    def to_payload(self) -> dict:
        """Serialize for live delivery."""
        return {
            "type": self.notification_type.value,
            "severity": self.tier.value,
            "condition": self.condition.value,
            "title": self.title,
            "message": self.message,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "min_level": self.min_level,
        }
