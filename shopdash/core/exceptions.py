"""Application errors and their RFC 7807 rendering.

Services raise the subclasses below; the handlers registered by
``register_exception_handlers`` turn them into problem+json responses.
Each subclass fixes its code and HTTP status as class attributes.
"""

from typing import Any, ClassVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from shopdash.core.logging import get_logger
from shopdash.core.problem_details import ProblemDetailResponse, problem_response

logger = get_logger(__name__)


# =============================================================================
# Exception Classes
# =============================================================================


class ShopDashError(Exception):
    """Base class for errors the API reports to clients.

    Args:
        message: Human-readable explanation, sent as ``detail``.
        details: Extra context for the logs. Not sent to clients.
    """

    code: ClassVar[str] = "INTERNAL_ERROR"
    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = "Internal error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def title(self) -> str:
        """Problem title derived from the code, e.g. ``Insufficient Stock``."""
        return self.code.replace("_", " ").title()


class NotFoundError(ShopDashError):
    """A product, sale or customer id does not exist."""

    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class InvalidInputError(ShopDashError):
    """Record collections are not a sequence of objects.

    Raised at the record boundary before aggregation runs. Field-level
    damage inside a record is coerced instead, so this only signals a
    caller contract violation.
    """

    code = "INVALID_INPUT"
    status_code = 422
    default_message = "Invalid record collection"


class StorageError(ShopDashError):
    """The key-value store could not be read or written."""

    code = "STORAGE_ERROR"
    status_code = 500
    default_message = "Storage operation failed"


class ConflictError(ShopDashError):
    """The write clashes with an existing record, e.g. a taken email."""

    code = "CONFLICT"
    status_code = 409
    default_message = "Resource conflict"


class InsufficientStockError(ShopDashError):
    """A sale asks for more units than the product has in stock."""

    code = "INSUFFICIENT_STOCK"
    status_code = 409
    default_message = "Insufficient stock for this product"


# =============================================================================
# Exception Handlers (RFC 7807)
# =============================================================================


async def shopdash_exception_handler(request: Request, exc: ShopDashError) -> ProblemDetailResponse:
    """Render a ShopDashError. Server-side failures log at error level."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app.error_handled",
        error_code=exc.code,
        status_code=exc.status_code,
        error=exc.message,
        details=exc.details,
        path=request.url.path,
    )
    return problem_response(
        status=exc.status_code,
        title=exc.title,
        detail=exc.message,
        error_code=exc.code,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> ProblemDetailResponse:
    """Render request validation failures with one entry per bad field.

    ``loc`` prefixes such as ``body`` or ``query`` are dropped, so a
    missing customer email is reported as field ``email``.
    """
    field_errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    logger.warning(
        "app.validation_failed",
        path=request.url.path,
        fields=[entry["field"] for entry in field_errors],
    )
    return problem_response(
        status=422,
        title="Validation Error",
        detail=f"{len(field_errors)} field(s) failed validation",
        error_code="VALIDATION_ERROR",
        errors=field_errors,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> ProblemDetailResponse:
    """Last-resort 500 for bugs. The traceback goes to the log only."""
    logger.error(
        "app.unhandled_error",
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail="Something went wrong on our side. Quote the request id when reporting it.",
        error_code="INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the problem-details handlers to ``app``."""
    app.add_exception_handler(ShopDashError, shopdash_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        validation_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
