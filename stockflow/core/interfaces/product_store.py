"""Abstract interface for the product quantity store."""

from abc import ABC, abstractmethod

from stockflow.core.entities.product import Product, ProductFilter


class IProductStore(ABC):
    """Interface for product persistence.

    Quantity is written only through ``IInventoryStore.stock_transaction``;
    ``update_product`` leaves it untouched.
    """

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a new product. Raises DuplicateSkuError on SKU conflict."""
        pass

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def get_by_sku(self, sku: str) -> Product | None:
        """Get product by SKU."""
        pass

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Update non-quantity fields of a product."""
        pass

    @abstractmethod
    async def delete_product(self, product_id: int) -> bool:
        """Delete a product and its ledger rows. Returns False if it does not exist."""
        pass

    @abstractmethod
    async def list_products(
        self,
        filters: ProductFilter | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        """List products matching optional filters, ordered by id."""
        pass

    @abstractmethod
    async def list_low_stock(self, limit: int = 100, offset: int = 0) -> list[Product]:
        """List products whose quantity is at or below their minimum level."""
        pass
