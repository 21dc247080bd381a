from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

metrics_router = APIRouter(tags=["metrics"])

# Labels carry the route template (/Patient/{patient_id}), never a concrete id.

http_requests_total = Counter(
    "patient_api_http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status_code"),
)

http_request_duration_seconds = Histogram(
    "patient_api_http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("method", "route", "status_code"),
    # All handlers are in-memory; most requests land in the first buckets.
    buckets=(0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)


def route_label(request: Request) -> str:
    """
    Return the matched route template, or "unmatched".

    Raw paths are never used: /Patient/42 would leak a patient id into labels and logs.
    """

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            label = route_label(request)
            method = request.method
            code = str(int(status_code))
            duration = time.perf_counter() - started
            http_requests_total.labels(method=method, route=label, status_code=code).inc()
            http_request_duration_seconds.labels(
                method=method, route=label, status_code=code
            ).observe(duration)


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
