"""Pydantic schemas for analytics endpoints.

The summary is a derived value object; nothing here is persisted.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from shopdash.features.data_platform.schemas import PaymentMethod

# =============================================================================
# Enums
# =============================================================================


class ReportWindow(int, Enum):
    """Reporting windows offered by the dashboard selector."""

    LAST_7_DAYS = 7
    LAST_30_DAYS = 30
    LAST_90_DAYS = 90
    LAST_YEAR = 365


# =============================================================================
# Summary Schemas
# =============================================================================


class TopProduct(BaseModel):
    """Revenue and units for one product name within the window."""

    name: str = Field(..., description="Product name as recorded on the line items.")
    quantity: int = Field(..., description="Net units sold in the window; refunds count negative.")
    revenue: Decimal = Field(..., description="Sum of line totals in the window.")


class DailySales(BaseModel):
    """Orders and revenue for one local calendar day."""

    day: date = Field(..., description="Local calendar day.")
    label: str = Field(..., description="Short chart label, e.g. 'Mar 4'.")
    sales: int = Field(..., ge=0, description="Number of sales on this day.")
    revenue: Decimal = Field(..., description="Sum of sale totals on this day.")


class CategoryRevenue(BaseModel):
    """Revenue attributed to one product category."""

    category: str = Field(..., description="Current product category, or 'Uncategorized'.")
    revenue: Decimal = Field(..., description="Sum of line totals in this category.")


class CustomerStats(BaseModel):
    """Customer cohort counts."""

    total_customers: int = Field(..., ge=0, description="All customer records.")
    returning_customers: int = Field(
        ...,
        ge=0,
        description="Customers with more than one matched sale (all time).",
    )
    new_customers: int = Field(
        ...,
        ge=0,
        description="Customers created on or after the window cutoff.",
    )
    retention_rate: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="returning / total as a percentage, one decimal place. 0 without customers.",
    )


class AnalyticsSummary(BaseModel):
    """Analytics for a trailing window of days."""

    model_config = ConfigDict(frozen=True)

    window_days: int = Field(..., ge=1, description="Window length in days.")
    start_date: date = Field(..., description="First local day of the window (inclusive).")
    end_date: date = Field(..., description="Reference local day (inclusive).")
    total_revenue: Decimal = Field(..., description="Sum of in-window sale totals.")
    total_sales: int = Field(..., ge=0, description="Number of in-window sales.")
    average_order_value: Decimal = Field(
        ...,
        description="total_revenue / total_sales rounded to cents, 0 without sales.",
    )
    top_products: list[TopProduct] = Field(
        ...,
        description="Best products by revenue, highest first.",
    )
    sales_by_day: list[DailySales] = Field(
        ...,
        description="One entry per day in the window, oldest first, zero-filled.",
    )
    sales_by_category: list[CategoryRevenue] = Field(
        ...,
        description="Revenue per category, highest first.",
    )
    customer_stats: CustomerStats


# =============================================================================
# Overview Schemas
# =============================================================================


class RecentSale(BaseModel):
    """Compact sale row for the dashboard."""

    id: str
    customer_name: str
    total: Decimal
    payment_method: PaymentMethod
    item_count: int = Field(..., ge=0, description="Number of line items.")
    created_at: datetime = Field(..., description="Sale timestamp.")


class LowStockItem(BaseModel):
    """Product at or below its minimum stock level."""

    id: str
    name: str
    stock: int
    min_stock: int


class DashboardOverview(BaseModel):
    """All-time shop counters for the landing page."""

    total_products: int = Field(..., ge=0)
    total_sales: int = Field(..., ge=0)
    total_customers: int = Field(..., ge=0)
    revenue: Decimal = Field(..., description="All-time sum of sale totals.")
    low_stock: int = Field(..., ge=0, description="Products at or below minimum stock.")
    recent_sales: list[RecentSale] = Field(..., description="Latest sales, newest first.")
    low_stock_items: list[LowStockItem] = Field(
        ...,
        description="First low-stock products in inventory order.",
    )
