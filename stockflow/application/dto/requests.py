"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from pydantic import BaseModel, Field


class CreateProductRequest(BaseModel):
    """Request to create a product.

    A positive ``quantity`` is booked as an initial purchase movement.
    """

    sku: str = Field(..., min_length=1, max_length=100, examples=["WID-001"])
    name: str = Field(..., min_length=1, max_length=255, examples=["Widget"])
    description: str | None = Field(default=None, description="Free-form description")
    category_id: int | None = Field(default=None, description="Category ID")
    quantity: int = Field(default=0, ge=0, description="Initial stock on hand")
    min_stock_level: int = Field(default=0, ge=0, description="Reorder threshold")
    unit_price: float = Field(default=0.0, ge=0, description="Price per unit")


class UpdateProductRequest(BaseModel):
    """Partial product update.

    ``quantity`` is accepted by the schema only so it can be refused with a
    clear error; stock changes go through movements.
    """

    sku: str | None = Field(default=None, min_length=1, max_length=100)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category_id: int | None = None
    min_stock_level: int | None = Field(default=None, ge=0)
    unit_price: float | None = Field(default=None, ge=0)
    quantity: int | None = Field(default=None, description="Not updatable; use movements")


class RecordMovementRequest(BaseModel):
    """Request to record a stock movement.

    Type and quantity are checked by the movement engine so that invalid
    values produce its domain errors.
    """

    product_id: int = Field(..., description="Product ID")
    movement_type: str = Field(
        ...,
        description="purchase, sale, adjustment, return or damage",
        examples=["purchase", "sale"],
    )
    quantity: int = Field(
        ...,
        description="Positive amount; the new absolute quantity for adjustments",
        examples=[10],
    )
    reason: str | None = Field(default=None, max_length=500)


class SystemNotificationRequest(BaseModel):
    """Request to send a system notification to a user."""

    user_id: int
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
