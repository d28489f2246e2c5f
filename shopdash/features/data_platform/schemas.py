"""Stored record schemas for the three shop collections.

These models are the boundary between raw JSON pulled out of the
key-value store and the rest of the application. Stored records are
camelCase JSON written by earlier versions of the dashboard and may be
missing fields or carry junk values, so every field coerces instead of
failing:

- missing or unparseable numbers become 0
- missing strings become ""
- missing or unparseable timestamps become the Unix epoch

Only structural damage (a collection that is not a list of objects)
is an error, see ``coerce_records``.
"""

import math
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shopdash.core.exceptions import InvalidInputError

UNCATEGORIZED = "Uncategorized"
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Any instant in this range converts to every UTC offset without overflowing
EARLIEST = datetime.min.replace(tzinfo=UTC) + timedelta(days=1)
LATEST = datetime.max.replace(tzinfo=UTC) - timedelta(days=1)

ZERO = Decimal("0")


# =============================================================================
# Coercion helpers
# =============================================================================


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # str() keeps 0.1 as Decimal("0.1") instead of the binary expansion
        return Decimal(str(value)) if math.isfinite(value) else ZERO
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
        return parsed if parsed.is_finite() else ZERO
    return ZERO


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    return int(_to_decimal(value))


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, int | float | Decimal):
        return str(value)
    return ""


def _to_category(value: Any) -> str:
    return _to_text(value) or UNCATEGORIZED


def _parse_timestamp(value: Any) -> datetime | None:
    parsed: datetime | None = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    elif isinstance(value, int | float) and not isinstance(value, bool):
        # Epoch milliseconds, as produced by Date.now()
        try:
            parsed = datetime.fromtimestamp(value / 1000, UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    try:
        parsed = parsed.astimezone(UTC)
    except OverflowError:
        return None
    if not EARLIEST <= parsed <= LATEST:
        return None
    return parsed


def _to_timestamp(value: Any) -> datetime:
    return _parse_timestamp(value) or EPOCH


def _to_line_items(value: Any) -> list[Any]:
    if isinstance(value, str | bytes) or not isinstance(value, Sequence):
        return []
    return [item for item in value if isinstance(item, Mapping | LineItem)]


Money = Annotated[Decimal, BeforeValidator(_to_decimal)]
Count = Annotated[int, BeforeValidator(_to_int)]
Text = Annotated[str, BeforeValidator(_to_text)]
Category = Annotated[str, BeforeValidator(_to_category)]
Timestamp = Annotated[datetime, BeforeValidator(_to_timestamp)]
OptionalTimestamp = Annotated[datetime | None, BeforeValidator(_parse_timestamp)]


# =============================================================================
# Enums
# =============================================================================


class PaymentMethod(str, Enum):
    """How a sale was paid."""

    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    OTHER = "other"


def _to_payment_method(value: Any) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(value)
    except ValueError:
        return PaymentMethod.OTHER


# =============================================================================
# Records
# =============================================================================


class StoredRecord(BaseModel):
    """Base for records persisted as camelCase JSON objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_storage(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON object kept in storage."""
        return self.model_dump(mode="json", by_alias=True)


class Product(StoredRecord):
    """An inventory item."""

    id: Text = ""
    name: Text = ""
    category: Category = UNCATEGORIZED
    price: Money = ZERO
    cost: Money = ZERO
    stock: Count = 0
    min_stock: Count = 0
    supplier: Text = ""
    description: Text = ""
    created_at: Timestamp = EPOCH
    updated_at: OptionalTimestamp = None

    @property
    def is_low_stock(self) -> bool:
        """True when stock is at or below the minimum level."""
        return self.stock <= self.min_stock


class LineItem(StoredRecord):
    """One product line within a sale.

    ``name`` and ``price`` are snapshots taken at sale time; the product
    may since have been renamed, repriced or deleted.
    """

    product_id: Text = ""
    name: Text = ""
    price: Money = ZERO
    quantity: Count = 0
    total: Money = ZERO


class Sale(StoredRecord):
    """A completed sale. Immutable once written."""

    id: Text = ""
    customer_name: Text = ""
    customer_email: Text = ""
    items: Annotated[list[LineItem], BeforeValidator(_to_line_items)] = Field(
        default_factory=list
    )
    total: Money = ZERO
    payment_method: Annotated[PaymentMethod, BeforeValidator(_to_payment_method)] = (
        PaymentMethod.OTHER
    )
    notes: Text = ""
    created_at: Timestamp = Field(default=EPOCH, alias="date")
    status: Text = "completed"


class Customer(StoredRecord):
    """A customer record.

    Purchase totals are not stored here; they are derived from the sales
    collection on every load (see ``relations.purchase_stats``).
    """

    id: Text = ""
    name: Text = ""
    email: Text = ""
    phone: Text = ""
    address: Text = ""
    notes: Text = ""
    created_at: Timestamp = EPOCH
    updated_at: OptionalTimestamp = None


# =============================================================================
# Collection boundary
# =============================================================================


R = TypeVar("R", bound=StoredRecord)


def coerce_records(raw: Any, model: type[R], collection: str) -> list[R]:
    """Turn a deserialized collection into a list of records.

    Args:
        raw: Deserialized JSON array (list of dicts) or already-built records.
        model: Record model to build.
        collection: Collection name, used in error details.

    Returns:
        Well-formed records in input order.

    Raises:
        InvalidInputError: If ``raw`` is not a sequence or holds non-objects.
    """
    if isinstance(raw, str | bytes | Mapping) or not isinstance(raw, Sequence):
        raise InvalidInputError(
            f"{collection} must be a sequence of objects, got {type(raw).__name__}",
            details={"collection": collection, "type": type(raw).__name__},
        )

    records: list[R] = []
    for index, item in enumerate(raw):
        if isinstance(item, model):
            records.append(item)
        elif isinstance(item, Mapping):
            records.append(model.model_validate(dict(item)))
        else:
            raise InvalidInputError(
                f"{collection}[{index}] must be an object, got {type(item).__name__}",
                details={
                    "collection": collection,
                    "index": index,
                    "type": type(item).__name__,
                },
            )
    return records


def coerce_products(raw: Any) -> list[Product]:
    """Coerce a raw products collection."""
    return coerce_records(raw, Product, "products")


def coerce_sales(raw: Any) -> list[Sale]:
    """Coerce a raw sales collection."""
    return coerce_records(raw, Sale, "sales")


def coerce_customers(raw: Any) -> list[Customer]:
    """Coerce a raw customers collection."""
    return coerce_records(raw, Customer, "customers")
