"""Shared pytest fixtures for ShopDash tests."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient

from shopdash.core.clock import get_clock
from shopdash.core.config import get_settings
from shopdash.core.storage import InMemoryStore, get_store
from shopdash.features.data_platform.repository import ShopRepositories
from shopdash.main import app

FIXED_NOW = datetime(2024, 3, 10, 15, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fixed_now() -> datetime:
    """Reference instant used by every clock in the tests."""
    return FIXED_NOW


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def repos(store: InMemoryStore) -> ShopRepositories:
    """Repositories over the in-memory store."""
    return ShopRepositories.from_store(store)


@pytest.fixture
async def client(store: InMemoryStore, fixed_now: datetime) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with storage and clock pinned for the test."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: (lambda: fixed_now)
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
