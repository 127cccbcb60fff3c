"""Abstract interface for reading the movement ledger."""

from abc import ABC, abstractmethod
from datetime import datetime

from stockflow.core.entities.movement import MovementTypeAggregate, StockMovement


class IMovementLedger(ABC):
    """Read-side interface for the append-only stock movement ledger."""

    @abstractmethod
    async def list_movements(
        self, limit: int = 100, offset: int = 0
    ) -> list[StockMovement]:
        """List all movements, newest first."""
        pass

    @abstractmethod
    async def list_by_product(
        self, product_id: int, limit: int | None = None
    ) -> list[StockMovement]:
        """List movements for a product, newest first."""
        pass

    @abstractmethod
    async def list_between(
        self, start: datetime, end: datetime
    ) -> list[StockMovement]:
        """List movements created within [start, end], newest first."""
        pass

    @abstractmethod
    async def aggregate_by_type(self, product_id: int) -> list[MovementTypeAggregate]:
        """Count and sum movement quantities per type for a product."""
        pass
