"""Customers module: customer CRUD with derived purchase stats."""

from shopdash.features.customers.routes import router
from shopdash.features.customers.schemas import CustomerCreate, CustomerRead, CustomerUpdate
from shopdash.features.customers.service import CustomerService

__all__ = [
    "CustomerCreate",
    "CustomerRead",
    "CustomerService",
    "CustomerUpdate",
    "router",
]
