"""Application use cases."""

from stockflow.application.use_cases.create_product import CreateProductUseCase
from stockflow.application.use_cases.manage_notifications import NotificationInboxUseCase
from stockflow.application.use_cases.record_movement import RecordMovementUseCase
from stockflow.application.use_cases.update_product import UpdateProductUseCase

__all__ = [
    "CreateProductUseCase",
    "UpdateProductUseCase",
    "RecordMovementUseCase",
    "NotificationInboxUseCase",
]
