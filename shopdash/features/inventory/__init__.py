"""Inventory module: product CRUD, search and stock status."""

from shopdash.features.inventory.routes import router
from shopdash.features.inventory.schemas import (
    ProductCreate,
    ProductRead,
    ProductUpdate,
    StockStatus,
)
from shopdash.features.inventory.service import InventoryService, stock_status

__all__ = [
    "InventoryService",
    "ProductCreate",
    "ProductRead",
    "ProductUpdate",
    "StockStatus",
    "router",
    "stock_status",
]
