"""Pydantic schemas for customer endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    """Fields submitted when adding a customer. Name and email are required."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(default="", max_length=50)
    address: str = ""
    notes: str = ""


class CustomerUpdate(CustomerCreate):
    """Full replacement of a customer's editable fields."""


class CustomerRead(BaseModel):
    """Customer with purchase stats derived from the sales history."""

    id: str
    name: str
    email: str
    phone: str
    address: str
    notes: str
    created_at: datetime
    updated_at: datetime | None = None
    total_purchases: Decimal = Field(..., description="Sum of matched sale totals.")
    purchase_count: int = Field(..., ge=0, description="Number of matched sales.")
    last_purchase: datetime | None = Field(None, description="Latest matched sale.")
