"""Service layer for completing and browsing sales.

Completing a sale touches all three collections:

1. products: stock is decremented for every line
2. sales: the sale is prepended to the history
3. customers: a customer is created when the email is new

There is no cross-collection transaction; each collection is saved
whole, in that order.
"""

import uuid
from collections.abc import Sequence
from decimal import Decimal

from shopdash.core.clock import Clock, utc_now
from shopdash.core.exceptions import InsufficientStockError, NotFoundError
from shopdash.core.logging import get_logger
from shopdash.features.data_platform.repository import ShopRepositories
from shopdash.features.data_platform.schemas import Customer, LineItem, Product, Sale
from shopdash.features.sales.schemas import LineItemRead, SaleCreate, SaleItemRequest, SaleRead

logger = get_logger(__name__)


def to_read(sale: Sale) -> SaleRead:
    """Build the API view of a sale."""
    return SaleRead(
        id=sale.id,
        customer_name=sale.customer_name,
        customer_email=sale.customer_email,
        items=[LineItemRead(**item.model_dump()) for item in sale.items],
        total=sale.total,
        payment_method=sale.payment_method,
        notes=sale.notes,
        created_at=sale.created_at,
        status=sale.status,
    )


def build_line_items(
    products: Sequence[Product],
    requests: Sequence[SaleItemRequest],
) -> list[LineItem]:
    """Price cart lines against current inventory.

    Lines for the same product are merged, and the merged quantity must
    fit in stock. Name and price are snapshotted onto the line.

    Raises:
        NotFoundError: If a product id is unknown.
        InsufficientStockError: If a product lacks stock for the quantity.
    """
    by_id = {product.id: product for product in products}
    quantities: dict[str, int] = {}
    for request in requests:
        if request.product_id not in by_id:
            raise NotFoundError(
                f"Product not found: {request.product_id}",
                details={"id": request.product_id},
            )
        quantities[request.product_id] = quantities.get(request.product_id, 0) + request.quantity

    lines: list[LineItem] = []
    for product_id, quantity in quantities.items():
        product = by_id[product_id]
        if product.stock < quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {product.name}: "
                f"{product.stock} left, {quantity} requested",
                details={"id": product_id, "stock": product.stock, "requested": quantity},
            )
        lines.append(
            LineItem(
                product_id=product_id,
                name=product.name,
                price=product.price,
                quantity=quantity,
                total=product.price * quantity,
            )
        )
    return lines


class SalesService:
    """Sale completion and history."""

    def __init__(self, repos: ShopRepositories, clock: Clock = utc_now) -> None:
        self.repos = repos
        self.clock = clock

    def list_sales(self, search: str | None = None) -> list[Sale]:
        """List sales, newest first.

        Args:
            search: Case-insensitive substring of the customer name, or
                a substring of the sale id.
        """
        sales = self.repos.sales.load()
        if search:
            needle = search.lower()
            sales = [s for s in sales if needle in s.customer_name.lower() or search in s.id]
        return sales

    def get_sale(self, sale_id: str) -> Sale:
        """Get a sale by id.

        Raises:
            NotFoundError: If no sale has this id.
        """
        for sale in self.repos.sales.load():
            if sale.id == sale_id:
                return sale
        raise NotFoundError(f"Sale not found: {sale_id}", details={"id": sale_id})

    def complete_sale(self, payload: SaleCreate) -> Sale:
        """Record a sale, take its units out of stock and register the customer.

        Raises:
            NotFoundError: If a product id is unknown.
            InsufficientStockError: If a product lacks stock.
        """
        now = self.clock()
        products = self.repos.products.load()
        items = build_line_items(products, payload.items)

        sale = Sale(
            id=uuid.uuid4().hex,
            customer_name=payload.customer_name,
            customer_email=payload.customer_email,
            items=items,
            total=sum((item.total for item in items), Decimal("0")),
            payment_method=payload.payment_method,
            notes=payload.notes,
            created_at=now,
            status="completed",
        )

        sold = {item.product_id: item.quantity for item in items}
        self.repos.products.save(
            [
                p.model_copy(update={"stock": p.stock - sold[p.id]}) if p.id in sold else p
                for p in products
            ]
        )
        self.repos.sales.save([sale, *self.repos.sales.load()])
        customer_created = self._register_customer(sale)

        logger.info(
            "sales.sale_completed",
            sale_id=sale.id,
            line_count=len(items),
            total=float(sale.total),
            payment_method=sale.payment_method.value,
            customer_created=customer_created,
        )
        return sale

    def _register_customer(self, sale: Sale) -> bool:
        if not sale.customer_email:
            return False
        customers = self.repos.customers.load()
        if any(c.email == sale.customer_email for c in customers):
            return False
        customers.append(
            Customer(
                id=uuid.uuid4().hex,
                name=sale.customer_name,
                email=sale.customer_email,
                created_at=sale.created_at,
            )
        )
        self.repos.customers.save(customers)
        return True
