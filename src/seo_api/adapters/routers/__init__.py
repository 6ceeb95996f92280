"""Routers Package Export (Adapters Layer).

Purpose:
    Provide stable exports for the application router aggregator (`api_router`)
    and the Prometheus scrape router (`metrics`). `main.py` imports these names
    from this package during startup.

Layer:
    adapters/routers
"""

from __future__ import annotations

from .api_router import router as api_router  # noqa: F401
from .metrics_router import router as metrics  # noqa: F401

__all__ = ["api_router", "metrics"]
