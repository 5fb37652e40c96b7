from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from boundary_pipeline.monitoring.state import ingestion_exporter, ingestion_metrics
from devkit.observability import configure_otel
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from assignment_api.dependencies import get_dataset_refresher, get_settings
from assignment_api.errors import ApiError
from assignment_api.middleware import ObservabilityMiddleware
from assignment_api.observability import (
    CompositeRequestMetricsCollector,
    InMemoryRequestMetricsCollector,
    PrometheusRequestMetricsCollector,
)
from assignment_api.response import error_response, success_response
from assignment_api.routers.assignment import router as assignment_router
from assignment_api.routers.boundaries import router as boundaries_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    refresher = get_dataset_refresher()
    await refresher.refresh_all()
    refresh_task: asyncio.Task | None = None
    if settings.DATASET_REFRESH_INTERVAL_SECONDS:
        refresh_task = asyncio.create_task(refresher.run_periodic(settings.DATASET_REFRESH_INTERVAL_SECONDS))
        logger.info(
            "dataset_refresh_scheduled",
            extra={"interval_seconds": settings.DATASET_REFRESH_INTERVAL_SECONDS},
        )
    try:
        yield
    finally:
        if refresh_task is not None:
            refresh_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await refresh_task


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Station Assignment API", version="0.1.0", lifespan=_lifespan)
    configure_otel(service_name=settings.SERVICE_NAME, service_version=app.version)
    app.state.request_metrics = InMemoryRequestMetricsCollector()
    app.state.prom_metrics = PrometheusRequestMetricsCollector()
    app.state.composite_metrics = CompositeRequestMetricsCollector(
        [app.state.request_metrics, app.state.prom_metrics]
    )
    app.add_middleware(ObservabilityMiddleware, collector=app.state.composite_metrics)
    app.include_router(assignment_router)
    app.include_router(boundaries_router)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> dict:
        return success_response({"status": "ready"}, meta={})

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = app.state.prom_metrics.render() + ingestion_exporter.render(ingestion_metrics)
        return Response(content=payload, media_type="text/plain; version=0.0.4")

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_response(exc.code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response("VALIDATION_ERROR", message),
        )

    return app


app = create_app()
