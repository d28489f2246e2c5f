"""Sales module: sale completion and history."""

from shopdash.features.sales.routes import router
from shopdash.features.sales.schemas import SaleCreate, SaleItemRequest, SaleRead
from shopdash.features.sales.service import SalesService, build_line_items

__all__ = [
    "SaleCreate",
    "SaleItemRequest",
    "SaleRead",
    "SalesService",
    "build_line_items",
    "router",
]
