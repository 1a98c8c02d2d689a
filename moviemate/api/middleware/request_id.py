"""
Request correlation and access logging.

Every request gets an X-Request-ID (echoed from the client or generated),
which is bound to the logging context for the duration of the request and
returned on the response. One access line is written per request with the
route, status, timing and, for authenticated routes, the caller's user id.
Headers are never logged, so Authorization values stay out of the logs.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from moviemate.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128
SLOW_REQUEST_MS = 1000


def _incoming_request_id(request: Request) -> str:
    supplied = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH and supplied.isprintable():
        return supplied
    return uuid.uuid4().hex


def _access_level(status_code: int, duration_ms: float) -> int:
    if status_code >= 500:
        return logging.ERROR
    if duration_ms > SLOW_REQUEST_MS:
        return logging.WARNING
    return logging.INFO


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the logging context and log each request once."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _incoming_request_id(request)
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Request failed",
                extra={"method": request.method, "path": request.url.path},
            )
            raise
        else:
            duration_ms = round((time.perf_counter() - start) * 1000, 1)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.log(
                _access_level(response.status_code, duration_ms),
                "%s %s -> %d",
                request.method,
                request.url.path,
                response.status_code,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                    "user_id": getattr(request.state, "user_id", None),
                },
            )
            return response
        finally:
            request_id_var.reset(token)
