"""HTTP middleware: request ids and access logging."""

import time
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from shopdash.core.logging import get_logger, request_id_ctx

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its outcome.

    A till or the dashboard may send its own ``X-Request-ID``; otherwise a
    UUID4 is generated. The id is exposed to log processors through
    ``request_id_ctx`` and echoed back on the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER)
        request_id = incoming or str(uuid.uuid4())
        token = request_id_ctx.set(request_id)
        route = f"{request.method} {request.url.path}"
        started = time.perf_counter()

        logger.debug("http.request_received", route=route, client_request_id=bool(incoming))
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("http.request_crashed", route=route)
            raise
        finally:
            request_id_ctx.reset(token)

        elapsed_ms = (time.perf_counter() - started) * 1000
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "http.request_served",
            route=route,
            status_code=response.status_code,
            duration_ms=round(elapsed_ms, 2),
            request_id=request_id,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
