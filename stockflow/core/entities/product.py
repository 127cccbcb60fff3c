"""Product entity held by the quantity store."""

from datetime import datetime

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A stocked product with its on-hand quantity and reorder threshold."""

    id: int | None = None
    sku: str
    name: str
    description: str | None = None
    category_id: int | None = None
    quantity: int = Field(default=0, ge=0)
    min_stock_level: int = Field(default=0, ge=0)
    unit_price: float = Field(default=0.0, ge=0)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def stock_value(self) -> float:
        """Inventory value = quantity * unit_price."""
        return self.quantity * self.unit_price

    @property
    def is_below_minimum(self) -> bool:
        return self.quantity < self.min_stock_level


class ProductFilter(BaseModel):
    """Optional filters for product listings."""

    category_id: int | None = None
    search: str | None = None
    low_stock: bool = False
