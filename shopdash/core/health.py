"""Liveness and readiness probes."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shopdash.core.config import get_settings
from shopdash.core.exceptions import StorageError
from shopdash.core.logging import get_logger
from shopdash.core.storage import AbstractKeyValueStore, get_store

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Probe result. ``storage`` is only reported by the readiness probe."""

    status: Literal["ok", "unhealthy"]
    storage: Literal["available", "unavailable"] | None = None
    backend: str | None = None


@router.get("", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """The process is up and serving requests."""
    return HealthResponse(status="ok")


@router.get("/ready", response_model=HealthResponse)
async def readiness(store: AbstractKeyValueStore = Depends(get_store)) -> HealthResponse:
    """The key-value store can be listed.

    Storage failures are reported in the body with a 200, so the probe
    itself never errors.
    """
    backend = get_settings().storage_backend
    try:
        stored = store.keys()
    except (StorageError, OSError) as e:
        logger.error("health.storage_unavailable", backend=backend, error=str(e), exc_info=True)
        return HealthResponse(status="unhealthy", storage="unavailable", backend=backend)

    logger.debug("health.storage_available", backend=backend, key_count=len(stored))
    return HealthResponse(status="ok", storage="available", backend=backend)
