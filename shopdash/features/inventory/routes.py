"""API routes for inventory endpoints."""

from fastapi import APIRouter, Depends, Query, status

from shopdash.core.clock import Clock, get_clock
from shopdash.features.data_platform.deps import get_repositories
from shopdash.features.data_platform.repository import ShopRepositories
from shopdash.features.inventory.schemas import ProductCreate, ProductRead, ProductUpdate
from shopdash.features.inventory.service import InventoryService, to_read

router = APIRouter(prefix="/inventory", tags=["inventory"])


def get_inventory_service(
    repos: ShopRepositories = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
) -> InventoryService:
    """Build the inventory service for a request."""
    return InventoryService(repos=repos, clock=clock)


@router.get("/products", response_model=list[ProductRead])
async def list_products(
    search: str | None = Query(
        None,
        description="Case-insensitive substring of product name or category.",
    ),
    category: str | None = Query(None, description="Exact category filter."),
    service: InventoryService = Depends(get_inventory_service),
) -> list[ProductRead]:
    """List products with optional search and category filter."""
    return [to_read(p) for p in service.list_products(search=search, category=category)]


@router.get("/categories", response_model=list[str])
async def list_categories(
    service: InventoryService = Depends(get_inventory_service),
) -> list[str]:
    """Distinct product categories."""
    return service.list_categories()


@router.get("/low-stock", response_model=list[ProductRead])
async def list_low_stock(
    service: InventoryService = Depends(get_inventory_service),
) -> list[ProductRead]:
    """Products at or below their minimum stock level."""
    return [to_read(p) for p in service.low_stock_products()]


@router.get("/products/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: str,
    service: InventoryService = Depends(get_inventory_service),
) -> ProductRead:
    """Get one product."""
    return to_read(service.get_product(product_id))


@router.post("/products", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    service: InventoryService = Depends(get_inventory_service),
) -> ProductRead:
    """Add a product."""
    return to_read(service.create_product(payload))


@router.put("/products/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: InventoryService = Depends(get_inventory_service),
) -> ProductRead:
    """Replace a product's editable fields."""
    return to_read(service.update_product(product_id, payload))


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    service: InventoryService = Depends(get_inventory_service),
) -> None:
    """Delete a product."""
    service.delete_product(product_id)
