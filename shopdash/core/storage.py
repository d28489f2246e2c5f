"""Key-value storage providers.

The shop keeps each record collection as one JSON-encoded string under a
fixed key, read and written wholesale. Providers here know nothing about
records; they only move strings.

CRITICAL: LocalJSONStore validates keys so a key can never escape the
storage directory.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path

from shopdash.core.config import get_settings
from shopdash.core.exceptions import StorageError
from shopdash.core.logging import get_logger

logger = get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class AbstractKeyValueStore(ABC):
    """Synchronous string-keyed storage."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored string for ``key`` or None when absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> bool:
        """Remove ``key``.

        Returns:
            True if removed, False if it was not present.
        """

    @abstractmethod
    def keys(self) -> list[str]:
        """Return stored keys in sorted order."""


class InMemoryStore(AbstractKeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)


class LocalJSONStore(AbstractKeyValueStore):
    """Local filesystem store with one ``<key>.json`` file per key.

    Writes go to a sibling temp file first and are swapped in with
    ``Path.replace`` so a crash never leaves a half-written collection.
    """

    SUFFIX = ".json"

    def __init__(self, root_dir: Path | str | None = None) -> None:
        """Initialize with root directory.

        Args:
            root_dir: Directory holding the key files. Defaults to Settings value.
        """
        if root_dir is None:
            root_dir = Path(get_settings().storage_dir)
        elif isinstance(root_dir, str):
            root_dir = Path(root_dir)
        self.root_dir = root_dir.resolve()
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def _resolve_path(self, key: str) -> Path:
        """Resolve a key to its file path.

        Raises:
            StorageError: If the key contains path separators or other
                characters outside ``[A-Za-z0-9_.-]``.
        """
        if not _KEY_PATTERN.match(key) or key in {".", ".."}:
            logger.warning("storage.invalid_key", key=key, root_dir=str(self.root_dir))
            raise StorageError(f"Invalid storage key: {key!r}", details={"key": key})
        return self.root_dir / f"{key}{self.SUFFIX}"

    def get_item(self, key: str) -> str | None:
        path = self._resolve_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {key!r}: {e}", details={"key": key}) from e

    def set_item(self, key: str, value: str) -> None:
        path = self._resolve_path(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {key!r}: {e}", details={"key": key}) from e
        logger.debug("storage.item_written", key=key, size_bytes=len(value.encode("utf-8")))

    def remove_item(self, key: str) -> bool:
        path = self._resolve_path(key)
        if not path.exists():
            return False
        path.unlink()
        logger.info("storage.item_removed", key=key)
        return True

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self.root_dir.glob(f"*{self.SUFFIX}"))


@lru_cache
def _default_store() -> AbstractKeyValueStore:
    settings = get_settings()
    if settings.storage_backend == "memory":
        return InMemoryStore()
    return LocalJSONStore(settings.storage_dir)


def get_store() -> AbstractKeyValueStore:
    """Dependency returning the process-wide key-value store.

    Tests override this dependency with an InMemoryStore.
    """
    return _default_store()
