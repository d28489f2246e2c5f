"""API routes for sales endpoints."""

from fastapi import APIRouter, Depends, Query, status

from shopdash.core.clock import Clock, get_clock
from shopdash.features.data_platform.deps import get_repositories
from shopdash.features.data_platform.repository import ShopRepositories
from shopdash.features.sales.schemas import SaleCreate, SaleRead
from shopdash.features.sales.service import SalesService, to_read

router = APIRouter(prefix="/sales", tags=["sales"])


def get_sales_service(
    repos: ShopRepositories = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
) -> SalesService:
    """Build the sales service for a request."""
    return SalesService(repos=repos, clock=clock)


@router.get("", response_model=list[SaleRead])
async def list_sales(
    search: str | None = Query(
        None,
        description="Customer name (case-insensitive) or sale id substring.",
    ),
    service: SalesService = Depends(get_sales_service),
) -> list[SaleRead]:
    """Sale history, newest first."""
    return [to_read(s) for s in service.list_sales(search=search)]


@router.get("/{sale_id}", response_model=SaleRead)
async def get_sale(
    sale_id: str,
    service: SalesService = Depends(get_sales_service),
) -> SaleRead:
    """Get one sale."""
    return to_read(service.get_sale(sale_id))


@router.post(
    "",
    response_model=SaleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Complete a sale",
    description="""
Record a sale for the given cart.

- Stock is decremented for every line.
- Lines for the same product are merged before the stock check.
- A customer record is created when `customer_email` is new.

Returns 409 when a product has insufficient stock.
""",
)
async def complete_sale(
    payload: SaleCreate,
    service: SalesService = Depends(get_sales_service),
) -> SaleRead:
    """Complete a sale."""
    return to_read(service.complete_sale(payload))
