"""Pydantic schemas for inventory endpoints."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class StockStatus(str, Enum):
    """Stock level relative to the product's minimum."""

    LOW = "Low Stock"
    MEDIUM = "Medium Stock"
    IN_STOCK = "In Stock"


class ProductCreate(BaseModel):
    """Fields submitted when adding a product.

    Only presence is checked; name, price and stock are required.
    """

    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(default="", max_length=100)
    price: Decimal = Field(..., ge=0)
    cost: Decimal = Field(default=Decimal("0"), ge=0)
    stock: int = Field(..., ge=0)
    min_stock: int | None = Field(
        default=None,
        ge=0,
        description="Low-stock threshold. Defaults to the configured minimum (5).",
    )
    supplier: str = Field(default="", max_length=200)
    description: str = Field(default="")


class ProductUpdate(ProductCreate):
    """Full replacement of a product's editable fields."""


class ProductRead(BaseModel):
    """Product as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    price: Decimal
    cost: Decimal
    stock: int
    min_stock: int
    supplier: str
    description: str
    created_at: datetime
    updated_at: datetime | None = None
    stock_status: StockStatus
