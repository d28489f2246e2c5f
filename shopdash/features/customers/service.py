"""Service layer for customer records.

Purchase stats are recomputed from the sales collection every time a
customer is read; see ``data_platform.relations`` for how sales are
attributed to customers.
"""

import uuid
from collections.abc import Sequence

from shopdash.core.clock import Clock, utc_now
from shopdash.core.exceptions import ConflictError, NotFoundError
from shopdash.core.logging import get_logger
from shopdash.features.customers.schemas import CustomerCreate, CustomerRead, CustomerUpdate
from shopdash.features.data_platform.relations import purchase_stats
from shopdash.features.data_platform.repository import ShopRepositories
from shopdash.features.data_platform.schemas import Customer, Sale

logger = get_logger(__name__)


def with_stats(customer: Customer, sales: Sequence[Sale]) -> CustomerRead:
    """Attach derived purchase stats to a customer."""
    stats = purchase_stats(customer, sales)
    return CustomerRead(
        **customer.model_dump(),
        total_purchases=stats.total_purchases,
        purchase_count=stats.purchase_count,
        last_purchase=stats.last_purchase,
    )


class CustomerService:
    """Customer CRUD over the customers collection."""

    def __init__(self, repos: ShopRepositories, clock: Clock = utc_now) -> None:
        self.repos = repos
        self.clock = clock

    def list_customers(self, search: str | None = None) -> list[CustomerRead]:
        """List customers with derived stats.

        Args:
            search: Case-insensitive substring of name or email.
        """
        customers = self.repos.customers.load()
        if search:
            needle = search.lower()
            customers = [
                c for c in customers if needle in c.name.lower() or needle in c.email.lower()
            ]
        sales = self.repos.sales.load()
        return [with_stats(c, sales) for c in customers]

    def get_customer(self, customer_id: str) -> CustomerRead:
        """Get a customer with derived stats.

        Raises:
            NotFoundError: If no customer has this id.
        """
        customer = self._find(self.repos.customers.load(), customer_id)
        return with_stats(customer, self.repos.sales.load())

    def create_customer(self, payload: CustomerCreate) -> CustomerRead:
        """Add a customer.

        Raises:
            ConflictError: If the email is already registered.
        """
        customers = self.repos.customers.load()
        self._ensure_email_free(customers, payload.email)

        customer = Customer(id=uuid.uuid4().hex, created_at=self.clock(), **payload.model_dump())
        customers.append(customer)
        self.repos.customers.save(customers)

        logger.info("customers.customer_created", customer_id=customer.id)
        return with_stats(customer, self.repos.sales.load())

    def update_customer(self, customer_id: str, payload: CustomerUpdate) -> CustomerRead:
        """Replace a customer's editable fields.

        Raises:
            NotFoundError: If no customer has this id.
            ConflictError: If another customer already uses the email.
        """
        customers = self.repos.customers.load()
        existing = self._find(customers, customer_id)
        self._ensure_email_free(customers, payload.email, exclude_id=customer_id)

        updated = existing.model_copy(update={**payload.model_dump(), "updated_at": self.clock()})
        self.repos.customers.save([updated if c.id == customer_id else c for c in customers])

        logger.info("customers.customer_updated", customer_id=customer_id)
        return with_stats(updated, self.repos.sales.load())

    def delete_customer(self, customer_id: str) -> None:
        """Remove a customer. Their sales stay in the history.

        Raises:
            NotFoundError: If no customer has this id.
        """
        customers = self.repos.customers.load()
        self._find(customers, customer_id)
        self.repos.customers.save([c for c in customers if c.id != customer_id])
        logger.info("customers.customer_deleted", customer_id=customer_id)

    @staticmethod
    def _find(customers: Sequence[Customer], customer_id: str) -> Customer:
        for customer in customers:
            if customer.id == customer_id:
                return customer
        raise NotFoundError(f"Customer not found: {customer_id}", details={"id": customer_id})

    @staticmethod
    def _ensure_email_free(
        customers: Sequence[Customer],
        email: str,
        exclude_id: str | None = None,
    ) -> None:
        if any(c.email == email and c.id != exclude_id for c in customers):
            raise ConflictError(
                "Customer with this email already exists",
                details={"email": email},
            )
