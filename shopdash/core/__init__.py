"""Core infrastructure: config, storage, clock, logging, middleware, exceptions."""

from shopdash.core.clock import Clock, get_clock, utc_now
from shopdash.core.config import Settings, get_settings
from shopdash.core.logging import get_logger, request_id_ctx
from shopdash.core.storage import AbstractKeyValueStore, get_store

__all__ = [
    "AbstractKeyValueStore",
    "Clock",
    "Settings",
    "get_clock",
    "get_logger",
    "get_settings",
    "get_store",
    "request_id_ctx",
    "utc_now",
]
