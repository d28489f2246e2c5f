"""FastAPI dependencies for repository access."""

from fastapi import Depends

from shopdash.core.storage import AbstractKeyValueStore, get_store
from shopdash.features.data_platform.repository import ShopRepositories


def get_repositories(
    store: AbstractKeyValueStore = Depends(get_store),
) -> ShopRepositories:
    """Build the shop repositories over the request's store."""
    return ShopRepositories.from_store(store)
