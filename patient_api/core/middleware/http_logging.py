"""HTTP logging middleware.

- Logs request metadata only: method, route template, status, duration.
- Generates or propagates X-Request-ID for correlation.
- Patient resources are PHI: bodies, query strings and headers are never logged.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from patient_api.core.metrics import route_label

logger = logging.getLogger("patient_api.http")

REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def get_or_create_request_id(*, request: Request) -> str:
    """Return the caller's X-Request-ID when it is safe to log, else a fresh UUID4 hex."""

    candidate = request.headers.get(REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """Log one record per request and stamp X-Request-ID on every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = get_or_create_request_id(request=request)
        started = time.perf_counter()
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - unexpected failures are logged with stack trace
            duration_ms = (time.perf_counter() - started) * 1000.0
            logger.exception(
                "Unhandled exception while processing request",
                extra={
                    "request_id": request_id,
                    "http_method": request.method,
                    "request_path": route_label(request),
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000.0
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": route_label(request),
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
