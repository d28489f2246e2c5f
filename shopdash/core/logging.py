"""structlog setup for ShopDash.

Events are named ``<area>.<what_happened>`` (``sales.sale_completed``,
``storage.collection_saved``) and carry the request id of the HTTP
request that produced them, plus the app environment and shop timezone.
"""

import logging
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any

import structlog
from structlog.types import Processor, WrappedLogger

from shopdash.core.config import Settings, get_settings

EventDict = MutableMapping[str, Any]

# Set by RequestIdMiddleware for the duration of one request
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def add_request_id(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
    """Copy the current request id, if any, into the event."""
    current = request_id_ctx.get()
    if current:
        event_dict["request_id"] = current
    return event_dict


def add_shop_context(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
    """Tag the event with the app environment and shop timezone."""
    settings = get_settings()
    event_dict.setdefault("app_env", settings.app_env)
    event_dict.setdefault("shop_tz", settings.shop_timezone)
    return event_dict


def _renderer(settings: Settings) -> Processor:
    if settings.log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=settings.is_development)
    return structlog.processors.JSONRenderer(ensure_ascii=False)


def _level(settings: Settings) -> int:
    # DEBUG=true always wins over LOG_LEVEL
    if settings.debug:
        return logging.DEBUG
    return logging.getLevelNamesMapping()[settings.log_level]


def configure_logging() -> None:
    """Install the ShopDash processor chain. Safe to call more than once."""
    settings = get_settings()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_request_id,
            add_shop_context,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level(settings)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not settings.is_testing,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Return a module logger, e.g. ``get_logger(__name__)``."""
    return structlog.get_logger(name)
