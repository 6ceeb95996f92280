# src/seo_api/adapters/routers/metrics_router.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Prometheus scrape endpoint (`/metrics`).

Exposes the text-format Prometheus endpoint and warms the lazily created
readiness histograms so their `_bucket`/`_count`/`_sum` series appear on the
very first scrape.

Layer:
    adapters/routers
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from seo_api.infrastructure.logging.logger import get_json_logger
from seo_api.infrastructure.observability.metrics import (
    get_readyz_cache_latency_seconds,
    get_readyz_repository_latency_seconds,
)

if TYPE_CHECKING:
    from prometheus_client import Histogram

logger = get_json_logger(__name__)
router = APIRouter()


def _ensure_observed_once(getter: Callable[[], Histogram], name: str) -> None:
    """Create (via getter) and ensure at least one observation (0.0 s)."""
    try:
        getter().observe(0.0)
    except Exception as exc:  # pragma: no cover
        logger.debug(
            "metrics_router: failed warming histogram",
            extra={"metric": name, "error": str(exc)},
        )


@router.get("/metrics", include_in_schema=False)
async def metrics_probe() -> Response:
    """Expose Prometheus metrics."""
    _ensure_observed_once(get_readyz_repository_latency_seconds, "readyz_repository_latency_seconds")
    _ensure_observed_once(get_readyz_cache_latency_seconds, "readyz_cache_latency_seconds")
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
