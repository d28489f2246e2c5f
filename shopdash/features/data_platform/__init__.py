"""Data platform feature: stored records and their repositories.

- Records: Product, Sale (with LineItem), Customer
- Repositories: one per collection, over the key-value store
- Relations: best-effort customer/sale join
"""

from shopdash.features.data_platform.relations import PurchaseStats, purchase_stats
from shopdash.features.data_platform.repository import (
    CUSTOMERS_KEY,
    PRODUCTS_KEY,
    SALES_KEY,
    CollectionRepository,
    ShopRepositories,
)
from shopdash.features.data_platform.schemas import (
    UNCATEGORIZED,
    Customer,
    LineItem,
    PaymentMethod,
    Product,
    Sale,
)

__all__ = [
    "CUSTOMERS_KEY",
    "PRODUCTS_KEY",
    "SALES_KEY",
    "UNCATEGORIZED",
    "CollectionRepository",
    "Customer",
    "LineItem",
    "PaymentMethod",
    "Product",
    "PurchaseStats",
    "Sale",
    "ShopRepositories",
    "purchase_stats",
]
