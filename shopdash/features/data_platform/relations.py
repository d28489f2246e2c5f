"""Best-effort join between customers and sales.

Sales do not carry a customer id. A sale belongs to a customer when its
``customer_email`` equals the customer's email, or its ``customer_name``
equals the customer's name. Matching is exact string equality: no case
folding and no whitespace trimming. Two customers sharing a name will
both claim each other's email-less sales, and a sale typed as "alice"
will not match "Alice". These are known limitations of the stored data.

Empty values never match, so a sale recorded without an email does not
attach to every customer whose email is also missing.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from shopdash.features.data_platform.schemas import Customer, Sale


@dataclass(frozen=True)
class PurchaseStats:
    """Derived purchase history for one customer.

    Attributes:
        total_purchases: Sum of matched sale totals.
        purchase_count: Number of matched sales.
        last_purchase: Latest matched sale timestamp, None without sales.
    """

    total_purchases: Decimal
    purchase_count: int
    last_purchase: datetime | None


def sale_matches_customer(sale: Sale, customer: Customer) -> bool:
    """Return True if ``sale`` is attributed to ``customer``."""
    if sale.customer_email and sale.customer_email == customer.email:
        return True
    return bool(sale.customer_name) and sale.customer_name == customer.name


def purchase_stats(customer: Customer, sales: Iterable[Sale]) -> PurchaseStats:
    """Derive purchase stats for a customer from the full sales history."""
    matched = [sale for sale in sales if sale_matches_customer(sale, customer)]
    return PurchaseStats(
        total_purchases=sum((sale.total for sale in matched), Decimal("0")),
        purchase_count=len(matched),
        last_purchase=max((sale.created_at for sale in matched), default=None),
    )
