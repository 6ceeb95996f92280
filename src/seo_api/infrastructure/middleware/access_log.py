# src/seo_api/infrastructure/middleware/access_log.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Access Log Middleware.

One ``access_log`` record per request. Fields:

    method, path, route, status, elapsed_ms, request_id, ok

``route`` is the matched path template (``/api/seo/{obj_name}/{obj_pk}``) so
entries group by endpoint rather than by key; it is ``None`` for unmatched
paths. 5xx responses and handler crashes log at WARNING, everything else at
INFO.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from seo_api.infrastructure.logging.logger import get_json_logger

_logger: logging.Logger = get_json_logger(__name__)


def _route_template(request: Request) -> str | None:
    route = request.scope.get("route")
    return getattr(route, "path_format", None)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Structured access logging around the downstream app."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            record: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "route": _route_template(request),
                "status": status_code,
                "elapsed_ms": round((time.perf_counter() - started) * 1000.0, 2),
                "request_id": getattr(request.state, "request_id", None),
                "ok": status_code < 500,
            }
            level = logging.WARNING if status_code >= 500 else logging.INFO
            _logger.log(level, "access_log", extra=record)
