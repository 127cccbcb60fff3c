"""SQLite implementation of product storage."""

from datetime import datetime

import aiosqlite

from stockflow.config import get_logger
from stockflow.core.entities.product import Product, ProductFilter
from stockflow.core.exceptions import DuplicateSkuError
from stockflow.core.interfaces.product_store import IProductStore
from stockflow.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteProductStore(IProductStore):
    """SQLite implementation of product storage."""

    async def create_product(self, product: Product) -> Product:
        """Create a new product."""
        now = datetime.utcnow()
        product.created_at = now
        product.updated_at = now
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO products (
                        sku, name, description, category_id, quantity,
                        min_stock_level, unit_price, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.sku,
                        product.name,
                        product.description,
                        product.category_id,
                        product.quantity,
                        product.min_stock_level,
                        product.unit_price,
                        product.created_at.isoformat(),
                        product.updated_at.isoformat(),
                    ),
                )
                product.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            if "products.sku" not in str(e):
                raise
            existing = await self.get_by_sku(product.sku)
            raise DuplicateSkuError(
                product.sku, existing.id if existing else None
            ) from e

        logger.info("product_created", product_id=product.id, sku=product.sku)
        return product

    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    async def get_by_sku(self, sku: str) -> Product | None:
        """Get product by SKU."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE sku = ?", (sku,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    async def update_product(self, product: Product) -> Product:
        """Update product details; quantity is left as stored."""
        product.updated_at = datetime.utcnow()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE products SET
                        sku = ?,
                        name = ?,
                        description = ?,
                        category_id = ?,
                        min_stock_level = ?,
                        unit_price = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        product.sku,
                        product.name,
                        product.description,
                        product.category_id,
                        product.min_stock_level,
                        product.unit_price,
                        product.updated_at.isoformat(),
                        product.id,
                    ),
                )
        except aiosqlite.IntegrityError as e:
            if "products.sku" not in str(e):
                raise
            existing = await self.get_by_sku(product.sku)
            raise DuplicateSkuError(
                product.sku, existing.id if existing else None
            ) from e

        logger.info("product_updated", product_id=product.id)
        return product

    async def delete_product(self, product_id: int) -> bool:
        """Delete a product; ledger rows cascade."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("product_deleted", product_id=product_id)
        return deleted

    async def list_products(
        self,
        filters: ProductFilter | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        """List products with optional filters and pagination."""
        conditions = []
        params: list = []

        if filters is not None:
            if filters.category_id is not None:
                conditions.append("category_id = ?")
                params.append(filters.category_id)
            if filters.search:
                conditions.append("(name LIKE ? OR sku LIKE ?)")
                pattern = f"%{filters.search}%"
                params.extend([pattern, pattern])
            if filters.low_stock:
                conditions.append("quantity <= min_stock_level")

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM products
                {where}
                ORDER BY id
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def list_low_stock(self, limit: int = 100, offset: int = 0) -> list[Product]:
        """List products at or below their minimum stock level."""
        return await self.list_products(
            ProductFilter(low_stock=True), limit=limit, offset=offset
        )

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        return Product(
            id=row["id"],
            sku=row["sku"],
            name=row["name"],
            description=row["description"],
            category_id=row["category_id"],
            quantity=row["quantity"],
            min_stock_level=row["min_stock_level"],
            unit_price=row["unit_price"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
