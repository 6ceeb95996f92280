# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""HTTP Schemas package (Adapters Layer).

Purpose:
    Public, adapter-facing HTTP schema surface. Re-exports the canonical
    envelopes and resource schemas used by routers. BaseHTTPSchema stays
    internal to this package.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from seo_api.adapters.schemas.http.envelopes import (
    ErrorEnvelope,
    ErrorObject,
    SuccessEnvelope,
)
from seo_api.adapters.schemas.http.page import PageHTTP, PageWriteHTTP
from seo_api.adapters.schemas.http.seo import SEOHTTP, SEOWriteHTTP

__all__ = [
    # Envelopes
    "ErrorObject",
    "ErrorEnvelope",
    "SuccessEnvelope",
    # Resources
    "SEOHTTP",
    "SEOWriteHTTP",
    "PageHTTP",
    "PageWriteHTTP",
]
