# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Tracing bootstrap (lazy & self-protecting).

- The OpenTelemetry API is always present; the SDK and instrumentations are
  optional and soft-imported.
- Early no-op in tests/CI or when OTEL_SDK_DISABLED is true.
- Exporter only configured if OTEL_EXPORTER_OTLP_ENDPOINT is set.
- Idempotent: safe to call multiple times.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

logger = logging.getLogger(__name__)
_OTEL_CONFIGURED: bool = False


def _should_disable() -> bool:
    """Return True if tracing should be disabled for this process."""
    env = (os.getenv("ENVIRONMENT") or "").strip().lower()
    disabled = os.getenv("OTEL_SDK_DISABLED", "").strip().lower() in {"1", "true", "yes"}
    under_pytest = ("pytest" in sys.modules) or bool(os.getenv("PYTEST_CURRENT_TEST"))
    if env in {"test", "ci"} or disabled or under_pytest:
        logger.info("otel.disabled", extra={"environment": env or "unknown"})
        return True
    return False


def _import_otel() -> tuple[Any, Any, Any, Any, Any | None, Any | None, Any | None] | None:
    """Soft-import OTEL SDK & instrumentations; return None if unavailable."""
    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
    except ImportError:
        logger.info("otel.sdk_not_installed; tracing disabled")
        return None

    try:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
    except ImportError:  # pragma: no cover
        FastAPIInstrumentor = None
    try:
        from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
    except ImportError:  # pragma: no cover
        SQLAlchemyInstrumentor = None
    try:
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    except ImportError:  # pragma: no cover
        OTLPSpanExporter = None

    return (
        trace,
        Resource,
        TracerProvider,
        BatchSpanProcessor,
        FastAPIInstrumentor,
        SQLAlchemyInstrumentor,
        OTLPSpanExporter,
    )


def configure_tracing(app: Any, *, service_name: str, service_version: str) -> None:
    """Initialize OpenTelemetry tracing and auto-instrumentation (best-effort)."""
    global _OTEL_CONFIGURED
    if _OTEL_CONFIGURED or _should_disable():
        return

    otel = _import_otel()
    if not otel:
        return
    (
        trace,
        Resource,
        TracerProvider,
        BatchSpanProcessor,
        FastAPIInstrumentor,
        SQLAlchemyInstrumentor,
        OTLPSpanExporter,
    ) = otel

    resource = Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", service_name),
            "service.version": service_version,
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        }
    )
    provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(provider)

    endpoint = (os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or "").strip()
    if endpoint and OTLPSpanExporter is not None:
        try:
            provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
        except Exception:
            logger.exception("otel.exporter_init_failed; continuing without exporter")
    else:
        logger.info("otel.exporter_skipped_no_endpoint")

    if FastAPIInstrumentor is not None:
        try:
            FastAPIInstrumentor.instrument_app(app)
        except Exception:
            logger.info("otel.fastapi_instrumentation_failed; skipping")
    if SQLAlchemyInstrumentor is not None:
        try:
            SQLAlchemyInstrumentor().instrument()
        except Exception:
            logger.info("otel.sqlalchemy_instrumentation_failed; skipping")

    _OTEL_CONFIGURED = True
    logger.info(
        "otel.tracing_configured",
        extra={"service": service_name, "version": service_version, "endpoint": endpoint or "none"},
    )
