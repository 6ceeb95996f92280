# src/seo_api/rpc/server.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""SEO API RPC Server.

Purpose:
    Framework-agnostic dispatch layer exposing the metadata controller as a
    small method-oriented API. The HTTP adapter lives in
    ``seo_api.adapters.routers.rpc_router`` and mounts it at ``POST /rpc``.

Exposed methods:
    - seo.get, seo.create, seo.update, seo.delete
    - page.list, page.get, page.create, page.update, page.delete
    - cache.purge

Contract:
    - Input: RPCRequest { method: str, params: dict | null }
    - Output: RPCResponse { result: any | null, error: RPCError | null }

Error codes follow gRPC status names. Classified domain errors keep their
code; parameter validation failures are INVALID_ARGUMENT; anything else is
logged and reported as INTERNAL without leaking details. Unknown methods raise
:class:`UnknownRPCMethodError` for the transport to translate.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from seo_api.adapters.controllers.metadata_controller import MetadataController
from seo_api.adapters.schemas.http.page import PageHTTP
from seo_api.adapters.schemas.http.seo import SEOHTTP
from seo_api.domain.exceptions.base import DomainError
from seo_api.domain.services.metadata_validation import validate_page, validate_seo
from seo_api.infrastructure.http.errors import DOMAIN_HTTP_STATUS
from seo_api.infrastructure.logging.logger import get_json_logger
from seo_api.infrastructure.observability.operations import observe_operation
from seo_api.rpc.schemas import (
    CachePurgeParams,
    PageSlugParams,
    PageWriteParams,
    RPCError,
    RPCRequest,
    RPCResponse,
    SEOKeyParams,
    SEOWriteParams,
)

logger = get_json_logger(__name__)

type Params = Mapping[str, Any]
type Handler = Callable[[Params], Awaitable[Any]]

#: Methods that mutate state and therefore require authentication.
WRITE_METHODS: frozenset[str] = frozenset(
    {
        "seo.create",
        "seo.update",
        "seo.delete",
        "page.create",
        "page.update",
        "page.delete",
        "cache.purge",
    }
)


class UnknownRPCMethodError(Exception):
    """Raised when an RPC method name is not recognized."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unknown RPC method: {method}")


class RPCServer:
    """Dispatches RPCRequest objects to the metadata controller."""

    def __init__(self, controller: MetadataController) -> None:
        self._controller = controller
        self._handlers: dict[str, Handler] = {
            "seo.get": self._seo_get,
            "seo.create": self._seo_create,
            "seo.update": self._seo_update,
            "seo.delete": self._seo_delete,
            "page.list": self._page_list,
            "page.get": self._page_get,
            "page.create": self._page_create,
            "page.update": self._page_update,
            "page.delete": self._page_delete,
            "cache.purge": self._cache_purge,
        }

    @property
    def methods(self) -> list[str]:
        return sorted(self._handlers)

    @staticmethod
    def requires_auth(method: str) -> bool:
        return method in WRITE_METHODS

    async def call(self, request: RPCRequest, *, trace_id: str | None = None) -> RPCResponse:
        """Dispatch a single RPC call.

        Args:
            request: Parsed RPCRequest instance.
            trace_id: Correlation id copied into any error payload.

        Returns:
            RPCResponse containing either ``result`` or ``error``.

        Raises:
            UnknownRPCMethodError: If the requested method is not supported.
        """
        handler = self._handlers.get(request.method)
        if handler is None:
            raise UnknownRPCMethodError(request.method)

        try:
            result = await handler(request.params or {})
        except ValidationError as exc:
            return RPCResponse(
                error=RPCError(
                    code="INVALID_ARGUMENT",
                    message="invalid params",
                    http_status=400,
                    details={"errors": jsonable_encoder(exc.errors(include_url=False))},
                    trace_id=trace_id,
                )
            )
        except DomainError as exc:
            status = DOMAIN_HTTP_STATUS.get(exc.code)
            if status is None:
                return self._internal(request.method, exc, trace_id)
            return RPCResponse(
                error=RPCError(
                    code=exc.code,
                    message=str(exc),
                    http_status=status,
                    details=dict(exc.details) or None,
                    trace_id=trace_id,
                )
            )
        except Exception as exc:
            return self._internal(request.method, exc, trace_id)
        return RPCResponse(result=result)

    @staticmethod
    def _internal(method: str, exc: Exception, trace_id: str | None) -> RPCResponse:
        logger.error(
            "rpc.unhandled_error",
            extra={"method": method, "error_type": type(exc).__name__, "trace_id": trace_id},
            exc_info=exc,
        )
        return RPCResponse(
            error=RPCError(
                code="INTERNAL",
                message="internal error",
                retryable=True,
                http_status=500,
                trace_id=trace_id,
            )
        )

    # ------------------------------------------------------------------ #
    # SEO
    # ------------------------------------------------------------------ #
    async def _seo_get(self, params: Params) -> dict[str, Any]:
        key = SEOKeyParams.model_validate(params)
        async with observe_operation("rpc", "seo.get"):
            seo = await self._controller.get_seo(key.obj_name, key.obj_pk)
        return SEOHTTP.from_entity(seo).model_dump_http()

    async def _seo_create(self, params: Params) -> dict[str, Any]:
        body = SEOWriteParams.model_validate(params)
        async with observe_operation("rpc", "seo.create"):
            created = await self._controller.create_seo(validate_seo(body.to_entity()))
        return SEOHTTP.from_entity(created).model_dump_http()

    async def _seo_update(self, params: Params) -> dict[str, Any]:
        body = SEOWriteParams.model_validate(params)
        async with observe_operation("rpc", "seo.update"):
            updated = await self._controller.update_seo(validate_seo(body.to_entity()))
        return SEOHTTP.from_entity(updated).model_dump_http()

    async def _seo_delete(self, params: Params) -> dict[str, Any]:
        key = SEOKeyParams.model_validate(params)
        async with observe_operation("rpc", "seo.delete"):
            await self._controller.delete_seo(key.obj_name, key.obj_pk)
        return {}

    # ------------------------------------------------------------------ #
    # Pages
    # ------------------------------------------------------------------ #
    async def _page_list(self, params: Params) -> list[dict[str, Any]]:
        async with observe_operation("rpc", "page.list"):
            pages = await self._controller.list_pages()
        return [PageHTTP.from_entity(p).model_dump_http() for p in pages]

    async def _page_get(self, params: Params) -> dict[str, Any]:
        key = PageSlugParams.model_validate(params)
        async with observe_operation("rpc", "page.get"):
            page = await self._controller.get_page(key.slug)
        return PageHTTP.from_entity(page).model_dump_http()

    async def _page_create(self, params: Params) -> dict[str, Any]:
        body = PageWriteParams.model_validate(params)
        async with observe_operation("rpc", "page.create"):
            created = await self._controller.create_page(validate_page(body.to_entity()))
        return PageHTTP.from_entity(created).model_dump_http()

    async def _page_update(self, params: Params) -> dict[str, Any]:
        body = PageWriteParams.model_validate(params)
        async with observe_operation("rpc", "page.update"):
            page = validate_page(body.to_entity())
            updated = await self._controller.update_page(page.slug, page)
        return PageHTTP.from_entity(updated).model_dump_http()

    async def _page_delete(self, params: Params) -> dict[str, Any]:
        key = PageSlugParams.model_validate(params)
        async with observe_operation("rpc", "page.delete"):
            await self._controller.delete_page(key.slug)
        return {}

    # ------------------------------------------------------------------ #
    # Cache administration
    # ------------------------------------------------------------------ #
    async def _cache_purge(self, params: Params) -> dict[str, Any]:
        body = CachePurgeParams.model_validate(params)
        async with observe_operation("rpc", "cache.purge"):
            evicted = await self._controller.purge_cache(body.pattern)
        return {"evicted": evicted}
