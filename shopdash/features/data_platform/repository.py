"""Collection repositories over the key-value store.

Each collection lives under one fixed key as a JSON array and is read
and written wholesale. Repositories are the only code that touches the
store; services receive them already constructed.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from shopdash.core.exceptions import StorageError
from shopdash.core.logging import get_logger
from shopdash.core.storage import AbstractKeyValueStore
from shopdash.features.data_platform.schemas import (
    Customer,
    Product,
    Sale,
    StoredRecord,
    coerce_records,
)

logger = get_logger(__name__)

PRODUCTS_KEY = "shop_products"
SALES_KEY = "shop_sales"
CUSTOMERS_KEY = "shop_customers"


R = TypeVar("R", bound=StoredRecord)


class CollectionRepository(Generic[R]):
    """Load and save one record collection.

    Args:
        store: Backing key-value store.
        key: Storage key holding the JSON array.
        model: Record model for the collection.
    """

    def __init__(self, store: AbstractKeyValueStore, key: str, model: type[R]) -> None:
        self.store = store
        self.key = key
        self.model = model

    def load_raw(self) -> Any:
        """Return the decoded JSON value, ``[]`` when the key is absent.

        Raises:
            StorageError: If the stored text is not valid JSON.
        """
        text = self.store.get_item(self.key)
        if text is None or not text.strip():
            return []
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("storage.collection_corrupt", key=self.key, error=str(e))
            raise StorageError(
                f"Collection {self.key!r} is not valid JSON",
                details={"key": self.key, "position": e.pos},
            ) from e

    def load(self) -> list[R]:
        """Load and coerce every record in the collection.

        Raises:
            StorageError: If the stored text is not valid JSON.
            InvalidInputError: If the JSON is not an array of objects.
        """
        records = coerce_records(self.load_raw(), self.model, self.key)
        logger.debug("storage.collection_loaded", key=self.key, count=len(records))
        return records

    def save(self, records: Sequence[R]) -> None:
        """Replace the whole collection with ``records``."""
        payload = json.dumps([record.to_storage() for record in records], ensure_ascii=False)
        self.store.set_item(self.key, payload)
        logger.info("storage.collection_saved", key=self.key, count=len(records))


@dataclass(frozen=True)
class ShopRepositories:
    """The three shop collections over one store."""

    products: CollectionRepository[Product]
    sales: CollectionRepository[Sale]
    customers: CollectionRepository[Customer]

    @classmethod
    def from_store(cls, store: AbstractKeyValueStore) -> ShopRepositories:
        """Build repositories for the fixed collection keys."""
        return cls(
            products=CollectionRepository(store, PRODUCTS_KEY, Product),
            sales=CollectionRepository(store, SALES_KEY, Sale),
            customers=CollectionRepository(store, CUSTOMERS_KEY, Customer),
        )
