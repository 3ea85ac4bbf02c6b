"""Request ID middleware: unique ID per request for tracing.

Every request gets an ID, either from the incoming X-Request-ID header or
auto-generated. The ID is bound to the logging context so it appears in all
log entries for that request, and returned in the response header. One
access log line is written per request, including requests that fail with
an unhandled exception.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from api.errors import unhandled_error_handler
from utils.logging import request_id_var

logger = logging.getLogger("api.access")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Generate and propagate a unique request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            try:
                response: Response = await call_next(request)
            except Exception as e:
                # Exception handlers run outside this middleware; answer here so
                # the 500 still carries the request id
                response = await unhandled_error_handler(request, e)

            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                f"{request.method} {request.url.path} {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "durationMs": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            return response
        finally:
            request_id_var.reset(token)
