# src/seo_api/rpc/schemas.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""RPC Schemas.

Purpose:
- Define the RPC envelopes, the error shape and per-method parameter models.
- SEO and Page write parameters reuse the HTTP write schemas so both
  transports accept the same field names (``OGTitle`` etc.).

Layer: adapters/rpc
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from seo_api.adapters.schemas.http.page import PageWriteHTTP
from seo_api.adapters.schemas.http.seo import SEOWriteHTTP

__all__ = [
    "CachePurgeParams",
    "PageSlugParams",
    "PageWriteParams",
    "RPCError",
    "RPCRequest",
    "RPCResponse",
    "SEOKeyParams",
    "SEOWriteParams",
]


class RPCError(BaseModel):
    """Standard RPC error shape."""

    model_config = ConfigDict(extra="forbid", title="RPCError")

    code: str = Field(
        ...,
        description=(
            "gRPC-style status name (INVALID_ARGUMENT, NOT_FOUND, ALREADY_EXISTS, "
            "UNAUTHENTICATED, UNIMPLEMENTED, INTERNAL)."
        ),
    )
    message: str = Field(..., description="Human-readable error message.")
    retryable: bool = Field(
        default=False,
        description="Whether clients should treat this error as retryable.",
    )
    http_status: int | None = Field(
        default=None,
        description="Equivalent HTTP status for the same failure.",
    )
    details: dict[str, Any] | None = None
    trace_id: str | None = Field(default=None, description="X-Request-ID of the call.")


class RPCRequest(BaseModel):
    """Generic RPC request envelope.

    Attributes:
        method: Method name (e.g. ``"seo.get"``).
        params: Optional method-specific parameters object.
    """

    model_config = ConfigDict(extra="forbid")

    method: str = Field(..., description="RPC method name (e.g. 'seo.get').")
    params: Mapping[str, Any] | None = Field(
        default=None,
        description="Method-specific parameters object.",
    )


class RPCResponse(BaseModel):
    """Generic RPC response envelope: exactly one of ``result``/``error`` is set."""

    model_config = ConfigDict(extra="forbid")

    result: Any | None = None
    error: RPCError | None = None


class SEOKeyParams(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    obj_name: str = Field(..., min_length=1)
    obj_pk: str = Field(..., min_length=1)


class SEOWriteParams(SEOWriteHTTP):
    """Parameters for ``seo.create`` and ``seo.update`` (full record)."""


class PageSlugParams(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    slug: str = Field(..., min_length=1)


class PageWriteParams(PageWriteHTTP):
    """Parameters for ``page.create`` and ``page.update`` (slug addresses the page)."""


class CachePurgeParams(BaseModel):
    """Parameters for ``cache.purge``; ``pattern`` is a glob such as ``"SEO:product:*"``."""

    model_config = ConfigDict(extra="forbid")

    pattern: str = Field(..., min_length=1)
