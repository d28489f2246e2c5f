"""Tests for stored record coercion."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from shopdash.core.exceptions import InvalidInputError
from shopdash.features.data_platform.schemas import (
    EPOCH,
    UNCATEGORIZED,
    Customer,
    LineItem,
    PaymentMethod,
    Product,
    Sale,
    coerce_customers,
    coerce_products,
    coerce_sales,
)


class TestProductCoercion:
    """Tests for Product field coercion."""

    def test_reads_camel_case_storage(self) -> None:
        """Stored camelCase keys should map onto snake_case fields."""
        product = Product.model_validate(
            {
                "id": "1700000000000",
                "name": "Widget",
                "category": "Tools",
                "price": 5.5,
                "cost": 2,
                "stock": 12,
                "minStock": 5,
                "createdAt": "2024-03-01T09:30:00.000Z",
            }
        )

        assert product.price == Decimal("5.5")
        assert product.cost == Decimal("2")
        assert product.min_stock == 5
        assert product.created_at == datetime(2024, 3, 1, 9, 30, tzinfo=UTC)

    def test_missing_fields_get_zero_values(self) -> None:
        """An empty object should coerce to zeros and empty strings."""
        product = Product.model_validate({})

        assert product.name == ""
        assert product.price == Decimal("0")
        assert product.stock == 0
        assert product.created_at == EPOCH
        assert product.updated_at is None

    @pytest.mark.parametrize("category", [None, "", 42.0])
    def test_blank_category_is_uncategorized(self, category: object) -> None:
        """Blank categories should fall back to Uncategorized."""
        product = Product.model_validate({"category": category})
        expected = UNCATEGORIZED if category in (None, "") else "42.0"
        assert product.category == expected

    @pytest.mark.parametrize("price", ["abc", None, True, float("nan"), "Infinity", [1]])
    def test_junk_numbers_become_zero(self, price: object) -> None:
        """Unparseable numbers should coerce to 0."""
        assert Product.model_validate({"price": price}).price == Decimal("0")

    def test_numeric_strings_are_parsed(self) -> None:
        """Numbers typed into form fields arrive as strings."""
        product = Product.model_validate({"price": " 19.99 ", "stock": "7"})

        assert product.price == Decimal("19.99")
        assert product.stock == 7

    def test_float_keeps_short_decimal(self) -> None:
        """0.1 should become Decimal('0.1'), not its binary expansion."""
        assert Product.model_validate({"price": 0.1}).price == Decimal("0.1")

    def test_is_low_stock(self) -> None:
        """Low stock is stock at or below the minimum."""
        assert Product(stock=5, min_stock=5).is_low_stock is True
        assert Product(stock=6, min_stock=5).is_low_stock is False

    def test_to_storage_uses_camel_case(self) -> None:
        """Serialized records should use the stored key names."""
        data = Product(id="p1", min_stock=3).to_storage()

        assert data["minStock"] == 3
        assert "min_stock" not in data
        assert "createdAt" in data


class TestSaleCoercion:
    """Tests for Sale and LineItem coercion."""

    def test_reads_date_key_as_created_at(self) -> None:
        """The sale timestamp is stored under 'date'."""
        sale = Sale.model_validate({"id": "s1", "date": "2024-03-10T08:00:00Z"})

        assert sale.created_at == datetime(2024, 3, 10, 8, 0, tzinfo=UTC)
        assert sale.to_storage()["date"] == "2024-03-10T08:00:00Z"

    def test_items_are_coerced(self) -> None:
        """Line items should coerce like top-level fields."""
        sale = Sale.model_validate(
            {
                "items": [
                    {"productId": "p1", "name": "Widget", "price": "5", "quantity": 2, "total": 10},
                    {"name": "Gadget"},
                ]
            }
        )

        assert sale.items[0] == LineItem(
            product_id="p1",
            name="Widget",
            price=Decimal("5"),
            quantity=2,
            total=Decimal("10"),
        )
        assert sale.items[1].total == Decimal("0")

    @pytest.mark.parametrize("items", [None, "widget", {"name": "x"}, 3])
    def test_non_list_items_become_empty(self, items: object) -> None:
        """A missing or malformed items field should read as no items."""
        assert Sale.model_validate({"items": items}).items == []

    def test_non_object_items_are_dropped(self) -> None:
        """Junk entries inside items should be skipped."""
        sale = Sale.model_validate({"items": [{"name": "Widget"}, "junk", None]})
        assert [item.name for item in sale.items] == ["Widget"]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("card", PaymentMethod.CARD),
            ("bank_transfer", PaymentMethod.BANK_TRANSFER),
            ("crypto", PaymentMethod.OTHER),
            (None, PaymentMethod.OTHER),
        ],
    )
    def test_payment_method(self, value: object, expected: PaymentMethod) -> None:
        """Unknown payment methods should read as 'other'."""
        assert Sale.model_validate({"paymentMethod": value}).payment_method == expected

    @pytest.mark.parametrize("value", ["yesterday", "", None, {}])
    def test_bad_timestamp_becomes_epoch(self, value: object) -> None:
        """Unparseable timestamps should sort before any real sale."""
        assert Sale.model_validate({"date": value}).created_at == EPOCH

    def test_epoch_millis_timestamp(self) -> None:
        """Numeric timestamps are epoch milliseconds."""
        sale = Sale.model_validate({"date": 1710057600000})
        assert sale.created_at == datetime(2024, 3, 10, 8, 0, tzinfo=UTC)

    def test_naive_timestamp_is_utc(self) -> None:
        """Timestamps without offset are read as UTC."""
        sale = Sale.model_validate({"date": "2024-03-10T08:00:00"})
        assert sale.created_at.tzinfo is not None
        assert sale.created_at == datetime(2024, 3, 10, 8, 0, tzinfo=UTC)

    def test_offset_timestamp_is_stored_as_utc(self) -> None:
        """Offsets are folded into a UTC instant."""
        sale = Sale.model_validate({"date": "2024-03-10T10:00:00+02:00"})
        assert sale.created_at.utcoffset() == timedelta(0)
        assert sale.created_at == datetime(2024, 3, 10, 8, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "value",
        [
            "0001-01-01T00:00:00+05:00",
            "0001-01-01T12:00:00Z",
            "9999-12-31T23:59:59-05:00",
            "9999-12-31T12:00:00Z",
        ],
    )
    def test_timestamp_at_calendar_limits_becomes_epoch(self, value: str) -> None:
        """Instants within a day of year 1 or 9999 cannot be shifted into local time."""
        assert Sale.model_validate({"date": value}).created_at == EPOCH

    def test_optional_timestamp_at_calendar_limit_is_none(self) -> None:
        """Optional timestamps drop out instead of falling back to the epoch."""
        product = Product.model_validate({"updatedAt": "0001-01-01T00:00:00+05:00"})
        assert product.updated_at is None


class TestCustomerCoercion:
    """Tests for Customer coercion."""

    def test_stored_derived_fields_are_ignored(self) -> None:
        """Persisted purchase totals are not part of the record."""
        customer = Customer.model_validate(
            {"id": "c1", "name": "Ann", "purchaseCount": 9, "totalPurchases": 100}
        )

        assert "purchaseCount" not in customer.to_storage()

    def test_missing_optional_strings(self) -> None:
        """Customers created from a sale have no phone or address."""
        customer = Customer.model_validate({"name": "Ann", "email": "ann@example.com"})

        assert customer.phone == ""
        assert customer.address == ""


class TestCoerceRecords:
    """Tests for the collection boundary."""

    def test_accepts_dicts_and_records(self) -> None:
        """Already-built records pass through unchanged."""
        existing = Product(id="p1", name="Widget")
        products = coerce_products([existing, {"id": "p2"}])

        assert products[0] is existing
        assert products[1].id == "p2"

    def test_empty_collection(self) -> None:
        """Empty input should give an empty list."""
        assert coerce_sales([]) == []
        assert coerce_sales(()) == []

    @pytest.mark.parametrize("raw", [None, "[]", b"[]", {"id": "1"}, 42])
    def test_rejects_non_sequences(self, raw: object) -> None:
        """Anything but a sequence is a caller error."""
        with pytest.raises(InvalidInputError) as exc_info:
            coerce_customers(raw)
        assert exc_info.value.details["collection"] == "customers"

    def test_rejects_non_object_entries(self) -> None:
        """Every entry must be an object."""
        with pytest.raises(InvalidInputError) as exc_info:
            coerce_sales([{"id": "s1"}, "s2"])

        assert exc_info.value.details["index"] == 1
        assert exc_info.value.details["type"] == "str"
