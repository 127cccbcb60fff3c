"""Notification entity for per-user inbox records."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class NotificationType(str, Enum):
    """Kinds of notification a user can receive."""

    STOCK_LOW = "stock_low"
    STOCK_CRITICAL = "stock_critical"
    STOCK_OUT = "stock_out"
    SUPPLIER_ALERT = "supplier_alert"
    SYSTEM = "system"


class Notification(BaseModel):
    """
    Persistent notification addressed to one user.

    Only ``read`` changes after creation, and only from False to True.
    """

    id: int | None = None
    user_id: int
    type: NotificationType
    title: str
    message: str
    product_id: int | None = None
    supplier_id: int | None = None
    read: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
