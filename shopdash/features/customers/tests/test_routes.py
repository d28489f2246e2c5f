"""Tests for customer API routes."""

from httpx import AsyncClient

ANN = {"name": "Ann Lee", "email": "ann@example.com", "phone": "555-0101"}


class TestCustomerRoutes:
    """Tests for /customers."""

    async def test_create_and_list(self, client: AsyncClient) -> None:
        """A created customer appears in the list with zero stats."""
        created = await client.post("/customers", json=ANN)

        assert created.status_code == 201
        body = created.json()
        assert body["purchase_count"] == 0
        assert body["total_purchases"] == "0"
        assert body["last_purchase"] is None

        listed = await client.get("/customers")
        assert [c["id"] for c in listed.json()] == [body["id"]]

    async def test_search(self, client: AsyncClient) -> None:
        """Search filters by name or email."""
        await client.post("/customers", json=ANN)
        await client.post("/customers", json={"name": "Bob", "email": "bob@shop.test"})

        response = await client.get("/customers", params={"search": "shop.test"})

        assert [c["name"] for c in response.json()] == ["Bob"]

    async def test_update_and_get(self, client: AsyncClient) -> None:
        """PUT replaces fields; GET returns the new values."""
        created = (await client.post("/customers", json=ANN)).json()

        updated = await client.put(
            f"/customers/{created['id']}", json={**ANN, "address": "1 High St"}
        )
        fetched = await client.get(f"/customers/{created['id']}")

        assert updated.status_code == 200
        assert fetched.json()["address"] == "1 High St"
        assert fetched.json()["updated_at"].startswith("2024-03-10T15:00:00")

    async def test_delete(self, client: AsyncClient) -> None:
        """DELETE removes the customer; a second DELETE is a 404."""
        created = (await client.post("/customers", json=ANN)).json()

        first = await client.delete(f"/customers/{created['id']}")
        second = await client.delete(f"/customers/{created['id']}")

        assert first.status_code == 204
        assert second.status_code == 404

    async def test_missing_customer(self, client: AsyncClient) -> None:
        """Unknown ids return 404 problem details."""
        response = await client.get("/customers/nope")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"
