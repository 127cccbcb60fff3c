"""
Domain exceptions for the Stockflow application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StockflowError(Exception):
    """Base exception for all Stockflow errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(StockflowError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Lookup Exceptions
class NotFoundError(StockflowError):
    """Referenced entity does not exist."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not found in the quantity store."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class NotificationNotFoundError(NotFoundError):
    """Notification not found (or not owned by the caller)."""

    def __init__(self, notification_id: int):
        super().__init__(
            f"Notification not found: {notification_id}",
            code="NOTIFICATION_NOT_FOUND",
            details={"notification_id": notification_id},
        )


# Validation Exceptions
class ValidationError(StockflowError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidMovementTypeError(ValidationError):
    """Movement type is not one of the recognised kinds."""

    def __init__(self, value: Any, allowed: list[str]):
        super().__init__(
            field="movement_type",
            message=f"Invalid movement type '{value}'. Allowed: {', '.join(allowed)}",
            value=value,
        )
        self.code = "INVALID_MOVEMENT_TYPE"
        self.details["allowed"] = allowed


class InvalidMovementQuantityError(ValidationError):
    """Movement quantity is not a positive integer."""

    def __init__(self, value: Any):
        super().__init__(
            field="quantity",
            message="Movement quantity must be a positive integer",
            value=value,
        )
        self.code = "INVALID_MOVEMENT_QUANTITY"


class QuantityUpdateNotAllowedError(ValidationError):
    """Product quantity may only change through a stock movement."""

    def __init__(self, product_id: int):
        super().__init__(
            field="quantity",
            message="Quantity can only be changed by recording a stock movement",
        )
        self.code = "QUANTITY_UPDATE_NOT_ALLOWED"
        self.details["product_id"] = product_id


# Business rule Exceptions
class ConflictError(StockflowError):
    """Operation conflicts with the current state."""

    pass


class InsufficientStockError(ConflictError):
    """Movement would drive product quantity below zero."""

    def __init__(self, product_id: int, current: int, requested: int):
        super().__init__(
            f"Insufficient stock: current {current}, requested {requested}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "current": current,
                "requested": requested,
            },
        )
        self.current = current
        self.requested = requested


class DuplicateSkuError(ConflictError):
    """Product with the same SKU already exists."""

    def __init__(self, sku: str, existing_id: int | None = None):
        super().__init__(
            f'Product with SKU "{sku}" already exists',
            code="DUPLICATE_SKU",
            details={"sku": sku, "existing_id": existing_id},
        )


# Alerting Exceptions
class AlertingError(StockflowError):
    """Alert evaluation or dispatch failed.

    Never propagated to the caller of a movement; logged and swallowed
    at the alerting boundary.
    """

    def __init__(self, stage: str, reason: str, product_id: int | None = None):
        super().__init__(
            f"Alerting failed during {stage}: {reason}",
            code="ALERTING_FAILED",
            details={"stage": stage, "reason": reason, "product_id": product_id},
        )
