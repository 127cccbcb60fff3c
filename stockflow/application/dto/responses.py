"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from stockflow.core.entities import (
    MovementTotals,
    MovementType,
    Notification,
    Product,
    StockAlert,
    StockMovement,
)


class ProductResponse(BaseModel):
    """Product response DTO."""

    id: int = Field(..., description="Product ID")
    sku: str = Field(..., description="Stock keeping unit")
    name: str = Field(..., description="Product name")
    description: str | None = Field(default=None, description="Description")
    category_id: int | None = Field(default=None, description="Category ID")
    quantity: int = Field(..., ge=0, description="Quantity on hand")
    min_stock_level: int = Field(..., ge=0, description="Reorder threshold")
    unit_price: float = Field(..., description="Price per unit")
    stock_value: float = Field(..., description="quantity * unit_price")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,  # type: ignore[arg-type]
            sku=product.sku,
            name=product.name,
            description=product.description,
            category_id=product.category_id,
            quantity=product.quantity,
            min_stock_level=product.min_stock_level,
            unit_price=product.unit_price,
            stock_value=product.stock_value,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductListResponse(BaseModel):
    """Page of products."""

    products: list[ProductResponse]
    limit: int
    offset: int


class StockMovementResponse(BaseModel):
    """Stock movement response DTO."""

    id: int = Field(..., description="Movement ID")
    product_id: int = Field(..., description="Product ID")
    movement_type: str = Field(..., description="Movement type")
    quantity: int = Field(..., description="Delta, or resulting quantity for adjustments")
    reason: str | None = Field(default=None, description="Reason")
    created_at: datetime

    @classmethod
    def from_entity(cls, movement: StockMovement) -> "StockMovementResponse":
        return cls(
            id=movement.id,  # type: ignore[arg-type]
            product_id=movement.product_id,
            movement_type=movement.movement_type.value,
            quantity=movement.quantity,
            reason=movement.reason,
            created_at=movement.created_at,
        )


class MovementListResponse(BaseModel):
    """List of stock movements."""

    movements: list[StockMovementResponse]
    total: int


class MovementSummaryResponse(BaseModel):
    """Movement counts per type for a product."""

    product_id: int
    counts: dict[str, int]

    @classmethod
    def from_summary(
        cls, product_id: int, summary: dict[MovementType, int]
    ) -> "MovementSummaryResponse":
        return cls(
            product_id=product_id,
            counts={movement_type.value: count for movement_type, count in summary.items()},
        )


class MovementTotalsResponse(BaseModel):
    """Inbound and outbound totals for a product."""

    product_id: int
    total_in: int
    total_out: int
    net: int

    @classmethod
    def from_totals(cls, product_id: int, totals: MovementTotals) -> "MovementTotalsResponse":
        return cls(
            product_id=product_id,
            total_in=totals.total_in,
            total_out=totals.total_out,
            net=totals.net,
        )


class StockAlertResponse(BaseModel):
    """Stock alert raised by an evaluation."""

    product_id: int
    product_name: str
    tier: str = Field(..., description="warning or critical")
    condition: str = Field(..., description="low_stock, critically_low or out_of_stock")
    quantity: int
    min_level: int
    title: str
    message: str

    @classmethod
    def from_alert(cls, alert: StockAlert) -> "StockAlertResponse":
        return cls(
            product_id=alert.product_id,
            product_name=alert.product_name,
            tier=alert.tier.value,
            condition=alert.condition.value,
            quantity=alert.quantity,
            min_level=alert.min_level,
            title=alert.title,
            message=alert.message,
        )


class EvaluationResponse(BaseModel):
    """Result of an on-demand stock evaluation."""

    product_id: int
    alert: StockAlertResponse | None = None


class NotificationResponse(BaseModel):
    """Notification response DTO."""

    id: int
    user_id: int
    type: str
    title: str
    message: str
    product_id: int | None = None
    supplier_id: int | None = None
    read: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,  # type: ignore[arg-type]
            user_id=notification.user_id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            product_id=notification.product_id,
            supplier_id=notification.supplier_id,
            read=notification.read,
            created_at=notification.created_at,
        )


class NotificationListResponse(BaseModel):
    """List of notifications."""

    notifications: list[NotificationResponse]
    total: int


class UnreadCountResponse(BaseModel):
    """Unread notification count."""

    count: int


class MarkAllReadResponse(BaseModel):
    """Number of notifications flagged read."""

    updated: int


class RealtimeStatusResponse(BaseModel):
    """Live session status."""

    connected_sessions: int
    connected_users: list[int]


class ComponentHealthResponse(BaseModel):
    """Health of one backing component."""

    status: str
    detail: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None
    sweep_running: bool | None = None
    live_sessions: int | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PRODUCT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
