"""Tests for the inventory service."""

from datetime import datetime
from decimal import Decimal

import pytest

from shopdash.core.exceptions import NotFoundError
from shopdash.features.data_platform.repository import ShopRepositories
from shopdash.features.data_platform.schemas import UNCATEGORIZED, Product
from shopdash.features.inventory.schemas import ProductCreate, ProductUpdate, StockStatus
from shopdash.features.inventory.service import InventoryService, stock_status


@pytest.fixture
def service(repos: ShopRepositories, fixed_now: datetime) -> InventoryService:
    """Inventory service over an empty store."""
    return InventoryService(repos, clock=lambda: fixed_now)


@pytest.fixture
def stocked(repos: ShopRepositories) -> list[Product]:
    """Three products across two categories."""
    products = [
        Product(id="p1", name="Claw Hammer", category="Tools", stock=2, min_stock=5),
        Product(id="p2", name="Garden Hose", category="Garden", stock=8, min_stock=5),
        Product(id="p3", name="Tool Belt", category="Tools", stock=30, min_stock=5),
    ]
    repos.products.save(products)
    return products


class TestStockStatus:
    """Tests for stock classification."""

    @pytest.mark.parametrize(
        ("stock", "expected"),
        [
            (0, StockStatus.LOW),
            (5, StockStatus.LOW),
            (6, StockStatus.MEDIUM),
            (10, StockStatus.MEDIUM),
            (11, StockStatus.IN_STOCK),
        ],
    )
    def test_thresholds(self, stock: int, expected: StockStatus) -> None:
        """Low at the minimum, medium up to twice the minimum."""
        assert stock_status(Product(stock=stock, min_stock=5)) == expected


class TestQueries:
    """Tests for listing and lookup."""

    def test_list_all(self, service: InventoryService, stocked: list[Product]) -> None:
        """Products come back in inventory order."""
        assert [p.id for p in service.list_products()] == ["p1", "p2", "p3"]

    @pytest.mark.parametrize(
        ("search", "expected"),
        [("hammer", ["p1"]), ("TOOL", ["p1", "p3"]), ("garden", ["p2"]), ("saw", [])],
    )
    def test_search(
        self,
        service: InventoryService,
        stocked: list[Product],
        search: str,
        expected: list[str],
    ) -> None:
        """Search matches name or category, ignoring case."""
        assert [p.id for p in service.list_products(search=search)] == expected

    def test_category_filter(self, service: InventoryService, stocked: list[Product]) -> None:
        """The category filter is an exact match."""
        assert [p.id for p in service.list_products(category="Tools")] == ["p1", "p3"]
        assert service.list_products(category="tools") == []

    def test_get_product(self, service: InventoryService, stocked: list[Product]) -> None:
        """Lookup by id."""
        assert service.get_product("p2").name == "Garden Hose"

    def test_get_missing_product(self, service: InventoryService) -> None:
        """Unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            service.get_product("nope")

    def test_categories(self, service: InventoryService, stocked: list[Product]) -> None:
        """Distinct categories in first-seen order."""
        assert service.list_categories() == ["Tools", "Garden"]

    def test_low_stock(self, service: InventoryService, stocked: list[Product]) -> None:
        """Only products at or below their minimum."""
        assert [p.id for p in service.low_stock_products()] == ["p1"]


class TestMutations:
    """Tests for create, update and delete."""

    def test_create_product(
        self, service: InventoryService, repos: ShopRepositories, fixed_now: datetime
    ) -> None:
        """New products are stamped and persisted."""
        product = service.create_product(
            ProductCreate(name="Spade", category="Garden", price=Decimal("24.99"), stock=4)
        )

        assert product.id
        assert product.created_at == fixed_now
        assert product.price == Decimal("24.99")
        assert repos.products.load() == [product]

    def test_create_defaults(self, service: InventoryService) -> None:
        """Blank category and missing minimum fall back to defaults."""
        product = service.create_product(ProductCreate(name="Rake", price=Decimal("9"), stock=1))

        assert product.category == UNCATEGORIZED
        assert product.min_stock == 5

    def test_create_keeps_zero_minimum(self, service: InventoryService) -> None:
        """An explicit zero minimum is not replaced."""
        product = service.create_product(
            ProductCreate(name="Rake", price=Decimal("9"), stock=1, min_stock=0)
        )
        assert product.min_stock == 0

    def test_update_product(
        self,
        service: InventoryService,
        stocked: list[Product],
        fixed_now: datetime,
    ) -> None:
        """Updates replace editable fields and keep identity."""
        updated = service.update_product(
            "p2",
            ProductUpdate(name="Hose 20m", category="Garden", price=Decimal("15"), stock=12),
        )

        assert updated.id == "p2"
        assert updated.name == "Hose 20m"
        assert updated.created_at == stocked[1].created_at
        assert updated.updated_at == fixed_now
        assert service.get_product("p2").name == "Hose 20m"

    def test_update_missing_product(self, service: InventoryService) -> None:
        """Updating an unknown id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            service.update_product("nope", ProductUpdate(name="x", price=Decimal("1"), stock=1))

    def test_delete_product(self, service: InventoryService, stocked: list[Product]) -> None:
        """Deleted products disappear from the list."""
        service.delete_product("p1")
        assert [p.id for p in service.list_products()] == ["p2", "p3"]

    def test_delete_missing_product(self, service: InventoryService) -> None:
        """Deleting an unknown id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            service.delete_product("nope")
