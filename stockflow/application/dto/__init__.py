"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from stockflow.application.dto.requests import (
    CreateProductRequest,
    RecordMovementRequest,
    SystemNotificationRequest,
    UpdateProductRequest,
)
from stockflow.application.dto.responses import (
    ComponentHealthResponse,
    ErrorResponse,
    EvaluationResponse,
    HealthResponse,
    MarkAllReadResponse,
    MovementListResponse,
    MovementSummaryResponse,
    MovementTotalsResponse,
    NotificationListResponse,
    NotificationResponse,
    ProductListResponse,
    ProductResponse,
    RealtimeStatusResponse,
    StockAlertResponse,
    StockMovementResponse,
    UnreadCountResponse,
)

__all__ = [
    # Requests
    "CreateProductRequest",
    "UpdateProductRequest",
    "RecordMovementRequest",
    "SystemNotificationRequest",
    # Responses
    "ProductResponse",
    "ProductListResponse",
    "StockMovementResponse",
    "MovementListResponse",
    "MovementSummaryResponse",
    "MovementTotalsResponse",
    "StockAlertResponse",
    "EvaluationResponse",
    "NotificationResponse",
    "NotificationListResponse",
    "UnreadCountResponse",
    "MarkAllReadResponse",
    "RealtimeStatusResponse",
    "ComponentHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
