"""Service layer for inventory operations."""

import uuid

from shopdash.core.clock import Clock, utc_now
from shopdash.core.config import get_settings
from shopdash.core.exceptions import NotFoundError
from shopdash.core.logging import get_logger
from shopdash.features.data_platform.repository import ShopRepositories
from shopdash.features.data_platform.schemas import Product
from shopdash.features.inventory.schemas import (
    ProductCreate,
    ProductRead,
    ProductUpdate,
    StockStatus,
)

logger = get_logger(__name__)


def stock_status(product: Product) -> StockStatus:
    """Classify stock against the product's minimum level."""
    if product.stock <= product.min_stock:
        return StockStatus.LOW
    if product.stock <= product.min_stock * 2:
        return StockStatus.MEDIUM
    return StockStatus.IN_STOCK


def to_read(product: Product) -> ProductRead:
    """Build the API view of a product."""
    return ProductRead(**product.model_dump(), stock_status=stock_status(product))


class InventoryService:
    """Product CRUD over the products collection."""

    def __init__(self, repos: ShopRepositories, clock: Clock = utc_now) -> None:
        self.repos = repos
        self.clock = clock
        self.settings = get_settings()

    def list_products(
        self,
        search: str | None = None,
        category: str | None = None,
    ) -> list[Product]:
        """List products, optionally filtered.

        Args:
            search: Case-insensitive substring of name or category.
            category: Exact category match.

        Returns:
            Matching products in inventory order.
        """
        products = self.repos.products.load()
        if search:
            needle = search.lower()
            products = [
                p for p in products if needle in p.name.lower() or needle in p.category.lower()
            ]
        if category:
            products = [p for p in products if p.category == category]
        return products

    def get_product(self, product_id: str) -> Product:
        """Get a product by id.

        Raises:
            NotFoundError: If no product has this id.
        """
        for product in self.repos.products.load():
            if product.id == product_id:
                return product
        raise NotFoundError(f"Product not found: {product_id}", details={"id": product_id})

    def list_categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(p.category for p in self.repos.products.load() if p.category))

    def low_stock_products(self) -> list[Product]:
        """Products at or below their minimum stock."""
        return [p for p in self.repos.products.load() if p.is_low_stock]

    def create_product(self, payload: ProductCreate) -> Product:
        """Add a product to inventory."""
        products = self.repos.products.load()
        product = Product(
            id=uuid.uuid4().hex,
            created_at=self.clock(),
            **self._editable_fields(payload),
        )
        products.append(product)
        self.repos.products.save(products)

        logger.info("inventory.product_created", product_id=product.id, name=product.name)
        return product

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product:
        """Replace a product's editable fields.

        Raises:
            NotFoundError: If no product has this id.
        """
        products = self.repos.products.load()
        for index, existing in enumerate(products):
            if existing.id == product_id:
                updated = existing.model_copy(
                    update={**self._editable_fields(payload), "updated_at": self.clock()}
                )
                products[index] = updated
                self.repos.products.save(products)
                logger.info("inventory.product_updated", product_id=product_id)
                return updated
        raise NotFoundError(f"Product not found: {product_id}", details={"id": product_id})

    def delete_product(self, product_id: str) -> None:
        """Remove a product. Past sales keep their line-item snapshots.

        Raises:
            NotFoundError: If no product has this id.
        """
        products = self.repos.products.load()
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            raise NotFoundError(f"Product not found: {product_id}", details={"id": product_id})
        self.repos.products.save(remaining)
        logger.info("inventory.product_deleted", product_id=product_id)

    def _editable_fields(self, payload: ProductCreate) -> dict[str, object]:
        fields = payload.model_dump()
        if fields["min_stock"] is None:
            fields["min_stock"] = self.settings.inventory_default_min_stock
        # Re-run category coercion so a blank category becomes "Uncategorized"
        return Product.model_validate(fields).model_dump(
            include=set(fields),
        )
