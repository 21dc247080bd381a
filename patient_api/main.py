from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from patient_api.api.exception_handlers import register_exception_handlers
from patient_api.api.schemas import HealthOut
from patient_api.core.logging import setup_logging
from patient_api.core.metrics import PrometheusMetricsMiddleware, metrics_router
from patient_api.core.middleware.http_logging import HttpLoggingMiddleware
from patient_api.core.settings import get_settings
from patient_api.patients.deps import init_patient_store
from patient_api.patients.router import router as patients_router

setup_logging()


def create_app() -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Records live for the lifetime of the process; each app gets its own store.
        init_patient_store(app=app)
        yield

    app = FastAPI(
        title="Patient Resource API",
        description=(
            "Minimal FHIR-style API for a single resource type, `Patient`.\n\n"
            "Status codes:\n"
            "- 400: the body is not a JSON object, or the identifier / URL id is malformed or "
            "does not match.\n"
            "- 404: no patient with that id.\n"
            "- 422: the body is well formed but breaks a rule on resourceType, name, gender "
            "or birthDate.\n\n"
            "Records are held in memory and lost on restart. Ids are never reused."
        ),
        lifespan=lifespan,
        docs_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "patients",
                "description": "Create, read, replace and delete Patient resources.",
            },
        ],
    )

    if settings.metrics_enabled:
        app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    if settings.metrics_enabled:
        app.include_router(metrics_router)
    app.include_router(patients_router)
    return app


app = create_app()
