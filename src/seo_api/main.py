# src/seo_api/main.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Application Entry (Adapters Bootstrap)

Synopsis:
    FastAPI bootstrap that wires middleware, exception handlers and all routers.
    Provides an application factory (`create_app`) and a module-level eager app
    (`app`) for tooling and tests.

Design:
    • Bootstrap only (no business logic): routers + middleware + handlers.
    • Lifespan initializes DB/Redis and the metadata components, and tears
      them down safely. When lifespan does not run (in-process ASGI clients),
      components are built on first use.
    • Observability:
        - Root JSON logging configured at import time.
        - OpenTelemetry tracing attached when the SDK is installed.
        - Prometheus metrics exposed on `/metrics`.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.middleware.gzip import GZipMiddleware
from starlette.requests import Request
from starlette.responses import Response as StarletteResponse

from seo_api import __version__
from seo_api.adapters.routers import api_router
from seo_api.adapters.routers import metrics as metrics_router
from seo_api.config.settings import Settings, get_settings
from seo_api.dependencies.core.bootstrap import bootstrap
from seo_api.domain.exceptions.base import DomainError
from seo_api.infrastructure.http.errors import (
    handle_domain_error,
    handle_http_exception,
    handle_unhandled_exception,
    handle_validation_error,
)
from seo_api.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
)
from seo_api.infrastructure.logging.tracing import configure_tracing
from seo_api.infrastructure.middleware.access_log import AccessLogMiddleware
from seo_api.infrastructure.middleware.request_id import RequestIdMiddleware

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
configure_root_logging()
logger = get_json_logger(__name__)


def _stable_operation_id(route: APIRoute) -> str:
    """Deterministic operationId, e.g. ``"get__api_seo_obj_name_obj_pk"``."""
    methods = ",".join(sorted(route.methods or []))
    path = route.path_format.replace("/", "_").replace("{", "").replace("}", "")
    return f"{methods.lower()}_{path.lower()}"


@asynccontextmanager
async def runtime_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize and teardown shared infrastructure via the core bootstrap.

    Exposes the resolved settings and the wired metadata components on
    ``app.state`` for downstream dependencies.
    """
    async with bootstrap(app) as state:
        app.state.settings = state.settings
        app.state.metadata = state.metadata
        yield


def _attach_middlewares(app: FastAPI) -> None:
    """Attach core middleware.

    Starlette runs the last-added middleware first, so GZip wraps the access
    log, which wraps the request-id middleware.
    """
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1024)


def _patch_exception_handlers(app: FastAPI) -> None:
    """Replace default exception handlers with ErrorEnvelope equivalents."""

    async def _domain_error_handler(request: Request, exc: Exception) -> StarletteResponse:
        if not isinstance(exc, DomainError):
            raise exc
        return await handle_domain_error(request, exc)

    async def _http_error_handler(request: Request, exc: Exception) -> StarletteResponse:
        if not isinstance(exc, HTTPException):
            raise exc
        return await handle_http_exception(request, exc)

    async def _validation_error_handler(request: Request, exc: Exception) -> StarletteResponse:
        if not isinstance(exc, RequestValidationError):
            raise exc
        return await handle_validation_error(request, exc)

    async def _unhandled_error_handler(request: Request, exc: Exception) -> StarletteResponse:
        return await handle_unhandled_exception(request, exc)

    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings: Settings = get_settings()
    service_version = settings.service_version or __version__

    app = FastAPI(
        title="SEO API",
        version=service_version,
        description="SEO and page metadata with a read-through cache.",
        lifespan=runtime_lifespan,
        generate_unique_id_function=_stable_operation_id,
    )

    try:
        configure_tracing(
            app, service_name=settings.service_name, service_version=service_version
        )
    except Exception as exc:  # pragma: no cover - observability must not break startup
        logger.debug("otel.configure_tracing_failed", extra={"error": str(exc)})

    _patch_exception_handlers(app)
    _attach_middlewares(app)

    app.include_router(api_router)
    app.include_router(metrics_router)

    logger.info(
        "service_startup",
        extra={
            "service": settings.service_name,
            "env": settings.environment.value,
            "version": service_version,
            "repository_backend": settings.repository_backend,
            "cache_backend": settings.cache_backend,
        },
    )
    return app


# Eager app for tools and tests.
app: FastAPI = create_app()


def main() -> None:
    """Console entrypoint: serve the app with uvicorn on ``PORT``."""
    import uvicorn

    uvicorn.run(
        "seo_api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=get_settings().port,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
