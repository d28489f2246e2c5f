"""API routes for customer endpoints."""

from fastapi import APIRouter, Depends, Query, status

from shopdash.core.clock import Clock, get_clock
from shopdash.features.customers.schemas import CustomerCreate, CustomerRead, CustomerUpdate
from shopdash.features.customers.service import CustomerService
from shopdash.features.data_platform.deps import get_repositories
from shopdash.features.data_platform.repository import ShopRepositories

router = APIRouter(prefix="/customers", tags=["customers"])


def get_customer_service(
    repos: ShopRepositories = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
) -> CustomerService:
    """Build the customer service for a request."""
    return CustomerService(repos=repos, clock=clock)


@router.get("", response_model=list[CustomerRead])
async def list_customers(
    search: str | None = Query(None, description="Case-insensitive name or email substring."),
    service: CustomerService = Depends(get_customer_service),
) -> list[CustomerRead]:
    """List customers with purchase stats."""
    return service.list_customers(search=search)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    """Get one customer."""
    return service.get_customer(customer_id)


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    """Add a customer. Returns 409 if the email is taken."""
    return service.create_customer(payload)


@router.put("/{customer_id}", response_model=CustomerRead)
async def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    """Replace a customer's editable fields."""
    return service.update_customer(customer_id, payload)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> None:
    """Delete a customer."""
    service.delete_customer(customer_id)
