"""Abstract interface for atomic quantity-and-ledger writes."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from stockflow.core.entities.movement import StockMovement
from stockflow.core.entities.product import Product


class IStockTransaction(ABC):
    """Operations available inside a single stock write transaction."""

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """Read the product as seen by this transaction."""
        pass

    @abstractmethod
    async def append_movement(self, movement: StockMovement) -> StockMovement:
        """Append a ledger row."""
        pass

    @abstractmethod
    async def set_quantity(self, product_id: int, quantity: int) -> None:
        """Overwrite the product's on-hand quantity."""
        pass


class IInventoryStore(ABC):
    """Interface for serialized, all-or-nothing stock updates."""

    @abstractmethod
    def stock_transaction(self) -> AbstractAsyncContextManager[IStockTransaction]:
        """
        Open a write transaction.

        Commits when the block exits normally and rolls back on any
        exception, cancellation included.
        """
        pass
