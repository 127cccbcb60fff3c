"""
Core business logic services.

Layer-pure services that depend only on:
- stockflow/core/entities/*
- stockflow/core/interfaces/*
- stockflow/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stockflow.core.services.alert_evaluator import AlertEvaluator, classify_stock_level
from stockflow.core.services.movement_engine import MovementEngine
from stockflow.core.services.notification_dispatcher import NotificationDispatcher
from stockflow.core.services.stock_alert_service import StockAlertService
from stockflow.core.services.stock_sweeper import StockSweeper, SweepResult

__all__ = [
    # Movements
    "MovementEngine",
    # Alerting
    "AlertEvaluator",
    "classify_stock_level",
    "StockAlertService",
    # Notifications
    "NotificationDispatcher",
    # Sweep
    "StockSweeper",
    "SweepResult",
]
