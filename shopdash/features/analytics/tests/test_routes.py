"""Tests for analytics API routes."""

import pytest
from httpx import AsyncClient

from shopdash.core.storage import InMemoryStore


class TestSummaryRoute:
    """Tests for GET /analytics/summary."""

    async def test_summary_default_window(
        self, seeded_store: InMemoryStore, client: AsyncClient
    ) -> None:
        """The default window is 30 days."""
        response = await client.get("/analytics/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["window_days"] == 30
        assert data["start_date"] == "2024-02-10"
        assert data["end_date"] == "2024-03-10"
        assert len(data["sales_by_day"]) == 30

    async def test_summary_seven_days(
        self, seeded_store: InMemoryStore, client: AsyncClient
    ) -> None:
        """Decimal amounts are serialized as strings."""
        response = await client.get("/analytics/summary", params={"window_days": 7})

        assert response.status_code == 200
        data = response.json()
        assert data["total_sales"] == 2
        assert data["average_order_value"] == "15.00"
        assert data["top_products"][0]["name"] == "Gadget"
        assert data["sales_by_category"] == [{"category": "Tools", "revenue": "30"}]
        assert data["sales_by_day"][0] == {
            "day": "2024-03-04",
            "label": "Mar 4",
            "sales": 0,
            "revenue": "0",
        }
        assert data["customer_stats"]["retention_rate"] == "50.0"

    @pytest.mark.parametrize("window", [7, 30, 90, 365])
    async def test_allowed_windows(self, client: AsyncClient, window: int) -> None:
        """Each selector option is accepted, even on an empty shop."""
        response = await client.get("/analytics/summary", params={"window_days": window})

        assert response.status_code == 200
        assert len(response.json()["sales_by_day"]) == window

    @pytest.mark.parametrize("window", [8, 0, "week"])
    async def test_rejects_other_windows(self, client: AsyncClient, window: object) -> None:
        """Windows outside the selector are a validation error."""
        response = await client.get("/analytics/summary", params={"window_days": window})

        assert response.status_code == 422
        assert response.headers["content-type"] == "application/problem+json"

    async def test_corrupt_storage_is_server_error(
        self, store: InMemoryStore, client: AsyncClient
    ) -> None:
        """Bad stored JSON is reported, not hidden."""
        store.set_item("shop_sales", "{oops")

        response = await client.get("/analytics/summary")

        assert response.status_code == 500
        assert response.json()["code"] == "STORAGE_ERROR"


class TestOverviewRoute:
    """Tests for GET /analytics/overview."""

    async def test_overview(
        self, seeded_store: InMemoryStore, client: AsyncClient
    ) -> None:
        """Overview lists recent sales newest first."""
        response = await client.get("/analytics/overview")

        assert response.status_code == 200
        data = response.json()
        assert data["total_products"] == 2
        assert data["revenue"] == "35"
        assert [sale["id"] for sale in data["recent_sales"]][:2] == ["s2", "s1"]
        assert data["low_stock_items"] == [
            {"id": "p1", "name": "Widget", "stock": 3, "min_stock": 5}
        ]
