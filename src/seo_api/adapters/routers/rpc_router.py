# src/seo_api/adapters/routers/rpc_router.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
RPC HTTP Router (Adapters Layer)

Purpose:
    Expose the RPC server over HTTP as a single typed endpoint:

        POST /rpc
            Body:  RPCRequest { "method": str, "params": { ... } | null }
            Reply: RPCResponse { "result": ..., "error": RPCError | null }

    Logical errors travel inside ``RPCResponse.error`` with HTTP 200. Unknown
    methods reply 404 with ``UNIMPLEMENTED``; failed authentication on a write
    method replies with the auth status and ``UNAUTHENTICATED``.

This router is a thin adapter over ``seo_api.rpc.server``.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response, status

from seo_api.dependencies.metadata import get_metadata_components
from seo_api.infrastructure.auth.jwt_dependency import authenticate
from seo_api.rpc.schemas import RPCError, RPCRequest, RPCResponse
from seo_api.rpc.server import RPCServer, UnknownRPCMethodError

router = APIRouter(prefix="/rpc", tags=["RPC"])


def get_rpc_server(request: Request) -> RPCServer:
    """Return the app's RPC server, bound to the wired metadata controller."""
    server: RPCServer | None = getattr(request.app.state, "rpc_server", None)
    if server is None:
        server = RPCServer(get_metadata_components(request.app).controller)
        request.app.state.rpc_server = server
    return server


@router.post("", response_model=RPCResponse, summary="Dispatch an RPC call")
async def rpc_call(body: RPCRequest, request: Request, response: Response) -> RPCResponse:
    """HTTP entrypoint for RPC calls."""
    server = get_rpc_server(request)
    trace_id: str | None = getattr(request.state, "request_id", None)

    if server.requires_auth(body.method):
        try:
            await authenticate(request)
        except HTTPException as exc:
            response.status_code = exc.status_code
            return RPCResponse(
                error=RPCError(
                    code="UNAUTHENTICATED" if exc.status_code == 401 else "INTERNAL",
                    message=str(exc.detail),
                    http_status=exc.status_code,
                    trace_id=trace_id,
                )
            )

    try:
        return await server.call(body, trace_id=trace_id)
    except UnknownRPCMethodError as exc:
        response.status_code = status.HTTP_404_NOT_FOUND
        return RPCResponse(
            error=RPCError(
                code="UNIMPLEMENTED",
                message=str(exc),
                http_status=status.HTTP_404_NOT_FOUND,
                trace_id=trace_id,
            )
        )
