# src/seo_api/adapters/routers/api_router.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""API Router Aggregator (Adapters Layer).

Purpose:
    Compose the top-level `router` that includes all feature routers.

Responsibilities:
    • Mount health endpoints under `/health`.
    • Mount SEO endpoints under `/api/seo/...`.
    • Mount page endpoints under `/api/page/...`.
    • Mount the RPC binding at `/rpc`.

Layer:
    adapters/routers
"""

from __future__ import annotations

from fastapi import APIRouter

from seo_api.adapters.routers.health_router import router as health_router
from seo_api.adapters.routers.page_router import router as page_router
from seo_api.adapters.routers.rpc_router import router as rpc_router
from seo_api.adapters.routers.seo_router import router as seo_router

router = APIRouter()

router.include_router(health_router, prefix="/health", tags=["Health"])

# BaseRouter already carries the /api/<resource> prefix.
router.include_router(seo_router)
router.include_router(page_router)

router.include_router(rpc_router)
