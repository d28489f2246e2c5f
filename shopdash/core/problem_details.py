"""RFC 7807 problem documents.

Every error leaving the API has this shape, so the dashboard frontend can
show a toast from ``title``/``detail`` and highlight form fields from
``errors``. See https://datatracker.ietf.org/doc/html/rfc7807.
"""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from shopdash.core.logging import request_id_ctx

ERROR_TYPE_BASE = "/errors"

ERROR_TYPES = {
    "NOT_FOUND": f"{ERROR_TYPE_BASE}/not-found",
    "VALIDATION_ERROR": f"{ERROR_TYPE_BASE}/validation",
    "INVALID_INPUT": f"{ERROR_TYPE_BASE}/invalid-input",
    "STORAGE_ERROR": f"{ERROR_TYPE_BASE}/storage",
    "CONFLICT": f"{ERROR_TYPE_BASE}/conflict",
    "INSUFFICIENT_STOCK": f"{ERROR_TYPE_BASE}/insufficient-stock",
    "INTERNAL_ERROR": f"{ERROR_TYPE_BASE}/internal",
}


class ProblemDetail(BaseModel):
    """Problem document with ShopDash extension members.

    ``code`` and ``request_id`` are always present on ShopDash errors;
    ``errors`` only on 422 responses.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="about:blank", description="URI identifying the problem type.")
    title: str = Field(..., description="Short summary of the problem type.")
    status: int = Field(..., ge=400, le=599)
    detail: str | None = Field(None, description="What went wrong this time.")
    instance: str | None = Field(None, description="/requests/<request id>")
    errors: list[dict[str, Any]] | None = Field(None, description="Per-field errors.")
    code: str | None = Field(None, description="Machine-readable error code.")
    request_id: str | None = None


class ProblemDetailResponse(JSONResponse):
    """JSONResponse sent as application/problem+json."""

    media_type = "application/problem+json"


def create_problem_detail(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
) -> ProblemDetail:
    """Build a problem document for the current request.

    Unknown codes get a type URI derived from the lowercased code.
    """
    request_id = request_id_ctx.get()
    type_uri = ERROR_TYPES.get(error_code) or f"{ERROR_TYPE_BASE}/{error_code.lower()}"
    return ProblemDetail(
        type=type_uri,
        title=title,
        status=status,
        detail=detail,
        instance=f"/requests/{request_id}" if request_id else None,
        errors=errors,
        code=error_code,
        request_id=request_id,
    )


def problem_response(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
) -> ProblemDetailResponse:
    """Build the problem document and wrap it in a response."""
    problem = create_problem_detail(status, title, detail, error_code, errors)
    return ProblemDetailResponse(status_code=status, content=problem.model_dump(exclude_none=True))
