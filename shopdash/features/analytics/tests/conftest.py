"""Test fixtures for analytics module.

The shop below is pinned to the shared reference instant
2024-03-10 15:00 UTC:

- s1 on 03-09: Ann buys 2 Widgets (10.00)
- s2 on 03-10: Bob buys 2 Gadgets (20.00)
- s3 on 01-01: Ann buys 1 Widget (5.00), outside the 7 and 30 day windows
"""

import json
from typing import Any

import pytest

from shopdash.core.storage import InMemoryStore
from shopdash.features.data_platform.repository import CUSTOMERS_KEY, PRODUCTS_KEY, SALES_KEY


@pytest.fixture
def sample_products() -> list[dict[str, Any]]:
    """Two tools in stock, one of them low."""
    return [
        {
            "id": "p1",
            "name": "Widget",
            "category": "Tools",
            "price": 5,
            "cost": 2,
            "stock": 3,
            "minStock": 5,
            "createdAt": "2023-11-01T09:00:00Z",
        },
        {
            "id": "p2",
            "name": "Gadget",
            "category": "Tools",
            "price": 10,
            "cost": 4,
            "stock": 40,
            "minStock": 5,
            "createdAt": "2023-11-01T09:00:00Z",
        },
    ]


@pytest.fixture
def sample_sales() -> list[dict[str, Any]]:
    """Sales history, newest first as the POS writes it."""
    return [
        {
            "id": "s2",
            "customerName": "Bob",
            "customerEmail": "bob@example.com",
            "items": [
                {"productId": "p2", "name": "Gadget", "price": 10, "quantity": 2, "total": 20}
            ],
            "total": 20,
            "paymentMethod": "card",
            "date": "2024-03-10T09:00:00Z",
        },
        {
            "id": "s1",
            "customerName": "Ann",
            "customerEmail": "ann@example.com",
            "items": [
                {"productId": "p1", "name": "Widget", "price": 5, "quantity": 2, "total": 10}
            ],
            "total": 10,
            "paymentMethod": "cash",
            "date": "2024-03-09T10:00:00Z",
        },
        {
            "id": "s3",
            "customerName": "Ann",
            "customerEmail": "ann@example.com",
            "items": [
                {"productId": "p1", "name": "Widget", "price": 5, "quantity": 1, "total": 5}
            ],
            "total": 5,
            "paymentMethod": "cash",
            "date": "2024-01-01T12:00:00Z",
        },
    ]


@pytest.fixture
def sample_customers() -> list[dict[str, Any]]:
    """Ann is a long-standing customer, Bob signed up today."""
    return [
        {
            "id": "c1",
            "name": "Ann",
            "email": "ann@example.com",
            "createdAt": "2023-12-01T10:00:00Z",
        },
        {
            "id": "c2",
            "name": "Bob",
            "email": "bob@example.com",
            "createdAt": "2024-03-10T08:00:00Z",
        },
    ]


@pytest.fixture
def seeded_store(
    store: InMemoryStore,
    sample_products: list[dict[str, Any]],
    sample_sales: list[dict[str, Any]],
    sample_customers: list[dict[str, Any]],
) -> InMemoryStore:
    """Shared store holding the sample shop as stored JSON."""
    store.set_item(PRODUCTS_KEY, json.dumps(sample_products))
    store.set_item(SALES_KEY, json.dumps(sample_sales))
    store.set_item(CUSTOMERS_KEY, json.dumps(sample_customers))
    return store
