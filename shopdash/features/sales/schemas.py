"""Pydantic schemas for sales endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from shopdash.features.data_platform.schemas import PaymentMethod


class SaleItemRequest(BaseModel):
    """One cart line: a product and how many units."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class SaleCreate(BaseModel):
    """A sale to complete.

    A customer name and at least one item are required. Repeated product
    ids are merged into one line.
    """

    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_email: str = Field(default="", max_length=200)
    items: list[SaleItemRequest] = Field(..., min_length=1)
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: str = ""


class LineItemRead(BaseModel):
    """Line item as returned by the API."""

    product_id: str
    name: str
    price: Decimal
    quantity: int
    total: Decimal


class SaleRead(BaseModel):
    """Sale as returned by the API."""

    id: str
    customer_name: str
    customer_email: str
    items: list[LineItemRead]
    total: Decimal
    payment_method: PaymentMethod
    notes: str
    created_at: datetime
    status: str
