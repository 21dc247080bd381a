from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from patient_api.api.errors import ErrorResponse, format_error
from patient_api.core.metrics import route_label
from patient_api.domain.exceptions import PatientRequestError

logger = logging.getLogger("patient_api.request_errors")

_ERROR_KINDS = {
    400: "malformed_request",
    404: "not_found",
    422: "business_rule_violation",
}


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")


def _respond(request: Request, error: ErrorResponse) -> JSONResponse:
    # IMPORTANT: do not log request bodies, query values or the error text (may echo PHI).
    logger.info(
        "Request rejected",
        extra={
            "request_id": _request_id(request),
            "http_method": request.method,
            "request_path": route_label(request),
            "status_code": error.status,
            "error": _ERROR_KINDS.get(error.status, "http_error"),
        },
    )
    return JSONResponse(status_code=error.status, content=error.body)


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(PatientRequestError)
    async def handle_patient_request_error(
        request: Request,
        exc: PatientRequestError,
    ) -> JSONResponse:
        return _respond(request, format_error(exc.status_code, exc.message, exc.details))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        # Unknown routes and wrong methods still answer with the {error, details} shape.
        response = _respond(request, format_error(exc.status_code, str(exc.detail)))
        if exc.headers:
            response.headers.update(exc.headers)
        return response
