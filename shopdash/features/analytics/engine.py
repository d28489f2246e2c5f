"""Aggregation engine for shop analytics.

Pure functions: no storage, no clock reads, no logging. Given the three
record collections, a window length and a reference instant, produce an
AnalyticsSummary. Calling twice with the same inputs gives the same
summary.

Raw collections (lists of dicts straight out of JSON) are coerced at the
boundary first, so the aggregation steps below can assume well-formed
records.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from shopdash.core.exceptions import InvalidInputError
from shopdash.features.analytics.schemas import (
    AnalyticsSummary,
    CategoryRevenue,
    CustomerStats,
    DailySales,
    DashboardOverview,
    LowStockItem,
    RecentSale,
    TopProduct,
)
from shopdash.features.analytics.window import ReportingWindow, local_date
from shopdash.features.data_platform.relations import sale_matches_customer
from shopdash.features.data_platform.schemas import (
    UNCATEGORIZED,
    Customer,
    Product,
    Sale,
    coerce_customers,
    coerce_products,
    coerce_sales,
)

ZERO = Decimal("0")
CENT = Decimal("0.01")
TENTH = Decimal("0.1")

DEFAULT_TOP_PRODUCTS = 5
DEFAULT_RECENT_SALES = 5
DEFAULT_LOW_STOCK_ITEMS = 5


@dataclass
class _ProductTally:
    quantity: int = 0
    revenue: Decimal = ZERO


def build_summary(
    products: Sequence[Any],
    sales: Sequence[Any],
    customers: Sequence[Any],
    window_days: int,
    now: datetime | None = None,
    tz: tzinfo = UTC,
    top_n: int = DEFAULT_TOP_PRODUCTS,
) -> AnalyticsSummary:
    """Compute the analytics summary for a trailing window.

    Args:
        products: Current inventory (dicts or Product records).
        sales: Full sales history (dicts or Sale records).
        customers: Customer records (dicts or Customer records).
        window_days: Window length in days, at least 1.
        now: Reference instant. Defaults to the current time.
        tz: Shop timezone used for calendar-day truncation.
        top_n: Number of top products to return.

    Returns:
        The summary for the window ending on the local day of ``now``.

    Raises:
        InvalidInputError: If a collection is not a sequence of objects,
            or ``window_days`` is not a positive integer.
    """
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days < 1:
        raise InvalidInputError(
            f"window_days must be a positive integer, got {window_days!r}",
            details={"window_days": repr(window_days)},
        )

    product_records = coerce_products(products)
    sale_records = coerce_sales(sales)
    customer_records = coerce_customers(customers)

    window = ReportingWindow.ending_at(now or datetime.now(tz), window_days, tz)
    in_window = [sale for sale in sale_records if window.contains(sale.created_at)]

    total_revenue = sum((sale.total for sale in in_window), ZERO)
    total_sales = len(in_window)

    return AnalyticsSummary(
        window_days=window_days,
        start_date=window.start,
        end_date=window.end,
        total_revenue=total_revenue,
        total_sales=total_sales,
        average_order_value=average_order_value(total_revenue, total_sales),
        top_products=top_products(in_window, limit=top_n),
        sales_by_day=daily_series(in_window, window),
        sales_by_category=category_breakdown(in_window, product_records),
        customer_stats=customer_stats(customer_records, sale_records, window.cutoff),
    )


def average_order_value(total_revenue: Decimal, total_sales: int) -> Decimal:
    """Revenue per sale rounded to cents, 0 when there are no sales."""
    if total_sales <= 0:
        return ZERO
    average = total_revenue / total_sales
    with localcontext() as ctx:
        # quantize fails unless every digit down to the cents fits in the precision
        ctx.prec = max(ctx.prec, average.adjusted() + 3)
        return average.quantize(CENT, rounding=ROUND_HALF_UP)


def top_products(sales: Sequence[Sale], limit: int = DEFAULT_TOP_PRODUCTS) -> list[TopProduct]:
    """Rank line-item names by accumulated revenue.

    Items are keyed by the name recorded on the line item, not by product
    id, so sales of renamed or deleted products still group under the
    label they were sold with. Ties keep first-seen order.
    """
    tallies: dict[str, _ProductTally] = {}
    for sale in sales:
        for item in sale.items:
            tally = tallies.setdefault(item.name, _ProductTally())
            tally.quantity += item.quantity
            tally.revenue += item.total

    ranked = sorted(tallies.items(), key=lambda entry: entry[1].revenue, reverse=True)
    return [
        TopProduct(name=name, quantity=tally.quantity, revenue=tally.revenue)
        for name, tally in ranked[:limit]
    ]


def daily_series(sales: Sequence[Sale], window: ReportingWindow) -> list[DailySales]:
    """One zero-filled entry per window day, oldest first."""
    buckets: dict[date, list[Sale]] = {day: [] for day in window.days}
    for sale in sales:
        bucket = buckets.get(local_date(sale.created_at, window.tz))
        if bucket is not None:
            bucket.append(sale)

    return [
        DailySales(
            day=day,
            label=day_label(day),
            sales=len(day_sales),
            revenue=sum((sale.total for sale in day_sales), ZERO),
        )
        for day, day_sales in buckets.items()
    ]


def day_label(day: date) -> str:
    """Short chart label such as ``Mar 4``."""
    return f"{day:%b} {day.day}"


def category_breakdown(
    sales: Sequence[Sale],
    products: Sequence[Product],
) -> list[CategoryRevenue]:
    """Revenue per current product category, highest first.

    Categories are looked up by line-item name against the current
    inventory (first product with that name wins). Items whose product
    no longer exists count as ``Uncategorized``.
    """
    category_by_name: dict[str, str] = {}
    for product in products:
        category_by_name.setdefault(product.name, product.category or UNCATEGORIZED)

    revenue: dict[str, Decimal] = {}
    for sale in sales:
        for item in sale.items:
            category = category_by_name.get(item.name, UNCATEGORIZED)
            revenue[category] = revenue.get(category, ZERO) + item.total

    ranked = sorted(revenue.items(), key=lambda entry: entry[1], reverse=True)
    return [CategoryRevenue(category=category, revenue=amount) for category, amount in ranked]


def customer_stats(
    customers: Sequence[Customer],
    sales: Sequence[Sale],
    cutoff: datetime,
) -> CustomerStats:
    """Total, returning and new customer counts.

    Returning customers are matched against the full sales history, not
    just the window. New customers are judged by their own creation time.
    """
    total = len(customers)
    returning = sum(
        1
        for customer in customers
        if sum(1 for sale in sales if sale_matches_customer(sale, customer)) > 1
    )
    new = sum(1 for customer in customers if customer.created_at >= cutoff)

    retention = ZERO
    if total:
        retention = (Decimal(returning * 100) / total).quantize(TENTH, rounding=ROUND_HALF_UP)

    return CustomerStats(
        total_customers=total,
        returning_customers=returning,
        new_customers=new,
        retention_rate=retention,
    )


def build_overview(
    products: Sequence[Any],
    sales: Sequence[Any],
    customers: Sequence[Any],
    recent_limit: int = DEFAULT_RECENT_SALES,
    low_stock_limit: int = DEFAULT_LOW_STOCK_ITEMS,
) -> DashboardOverview:
    """All-time counters for the dashboard landing page.

    Raises:
        InvalidInputError: If a collection is not a sequence of objects.
    """
    product_records = coerce_products(products)
    sale_records = coerce_sales(sales)
    customer_count = len(coerce_customers(customers))

    low_stock = [product for product in product_records if product.is_low_stock]
    recent = sorted(sale_records, key=lambda sale: sale.created_at, reverse=True)[:recent_limit]

    return DashboardOverview(
        total_products=len(product_records),
        total_sales=len(sale_records),
        total_customers=customer_count,
        revenue=sum((sale.total for sale in sale_records), ZERO),
        low_stock=len(low_stock),
        recent_sales=[
            RecentSale(
                id=sale.id,
                customer_name=sale.customer_name,
                total=sale.total,
                payment_method=sale.payment_method,
                item_count=len(sale.items),
                created_at=sale.created_at,
            )
            for sale in recent
        ],
        low_stock_items=[
            LowStockItem(
                id=product.id,
                name=product.name,
                stock=product.stock,
                min_stock=product.min_stock,
            )
            for product in low_stock[:low_stock_limit]
        ],
    )
