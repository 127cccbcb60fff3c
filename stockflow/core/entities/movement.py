"""Stock movement domain entities."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from stockflow.core.exceptions import InvalidMovementTypeError


class MovementDirection(str, Enum):
    """How a movement type affects on-hand quantity."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"
    ABSOLUTE = "absolute"


class MovementType(str, Enum):
    """Types of stock movements."""

    PURCHASE = "purchase"
    SALE = "sale"
    ADJUSTMENT = "adjustment"
    RETURN = "return"
    DAMAGE = "damage"

    @property
    def direction(self) -> MovementDirection:
        if self in (MovementType.PURCHASE, MovementType.RETURN):
            return MovementDirection.INBOUND
        if self in (MovementType.SALE, MovementType.DAMAGE):
            return MovementDirection.OUTBOUND
        return MovementDirection.ABSOLUTE

    @classmethod
    def parse(cls, value: Any) -> "MovementType":
        """Coerce a raw value into a MovementType or raise InvalidMovementTypeError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidMovementTypeError(value, [m.value for m in cls]) from None

    def apply(self, current: int, quantity: int) -> int:
        """Return the quantity that results from applying this movement."""
        direction = self.direction
        if direction is MovementDirection.INBOUND:
            return current + quantity
        if direction is MovementDirection.OUTBOUND:
            return current - quantity
        # Adjustment: the supplied value is the new absolute quantity
        return quantity


class StockMovement(BaseModel):
    """Immutable ledger record of a single stock movement.

    For adjustments, ``quantity`` is the resulting absolute quantity;
    for all other types it is the (positive) delta.
    """

    id: int | None = None
    product_id: int
    movement_type: MovementType
    quantity: int
    reason: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class MovementTotals:
    """Aggregate inbound and outbound flow for a product."""

    total_in: int = 0
    total_out: int = 0

    @property
    def net(self) -> int:
        return self.total_in - self.total_out


@dataclass(frozen=True)
class MovementTypeAggregate:
    """Row count and summed quantity of one movement type for a product."""

    movement_type: MovementType
    count: int
    total_quantity: int
