# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Health endpoints (Adapters Layer).

Purpose:
    Expose liveness and readiness signals for orchestrators and load balancers.

Design:
    * Readiness probes come from the wired metadata components (repository and
      cache), so the router never imports DB/Redis modules directly.
    * Probes run concurrently; latencies are recorded to Prometheus.
    * `probe_provider` is the DI token; tests override it by identity.
    * `/health/readiness` is canonical; `/health/ready` is an unlisted alias.
"""

from __future__ import annotations

import asyncio
import typing as t
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Annotated, Protocol

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import Field

from seo_api.adapters.schemas.http.base import BaseHTTPSchema
from seo_api.dependencies.metadata import Probe, get_metadata_components
from seo_api.infrastructure.logging.logger import get_json_logger
from seo_api.infrastructure.observability.metrics import (
    get_readyz_cache_latency_seconds,
    get_readyz_repository_latency_seconds,
)

logger = get_json_logger(__name__)
router = APIRouter()


class HealthState(str, Enum):
    """Overall service health classification."""

    OK = "ok"
    DEGRADED = "degraded"


class CheckResult(BaseHTTPSchema):
    """Result of a single dependency check."""

    name: str = Field(..., examples=["repository", "cache"])
    status: t.Literal["ok", "down"]
    detail: str | None = None
    duration_ms: float


class ReadinessResponse(BaseHTTPSchema):
    """Aggregated readiness response (checks in repository, cache order)."""

    status: HealthState
    checks: list[CheckResult] = Field(default_factory=list)


class LivenessResponse(BaseHTTPSchema):
    status: t.Literal["ok"] = "ok"


class HealthProbe(Protocol):
    """Minimal, non-destructive dependency checks returning ``(is_ok, detail)``."""

    async def repository(self) -> tuple[bool, str | None]: ...

    async def cache(self) -> tuple[bool, str | None]: ...


class ComponentsProbe:
    """Adapts the repository/cache probe callables to :class:`HealthProbe`.

    A probe that raises is reported as down with the exception type and
    message as detail; cancellation still propagates.
    """

    def __init__(self, *, repository_probe: Probe, cache_probe: Probe) -> None:
        self._repository_probe = repository_probe
        self._cache_probe = cache_probe

    @staticmethod
    async def _run(probe: Probe) -> tuple[bool, str | None]:
        try:
            await probe()
        except Exception as exc:
            return False, f"{type(exc).__name__}: {exc}"
        return True, None

    async def repository(self) -> tuple[bool, str | None]:
        return await self._run(self._repository_probe)

    async def cache(self) -> tuple[bool, str | None]:
        return await self._run(self._cache_probe)


class ProbeProvider:
    """Dependency token object for readiness routes."""

    def __call__(self, request: Request) -> HealthProbe:
        components = get_metadata_components(request.app)
        return ComponentsProbe(
            repository_probe=components.repository_probe,
            cache_probe=components.cache_probe,
        )


probe_provider = ProbeProvider()


@router.get(
    "/liveness",
    summary="Liveness",
    operation_id="health_liveness",
    response_model=LivenessResponse,
    status_code=status.HTTP_200_OK,
)
async def liveness() -> LivenessResponse:
    """Return a fast liveness signal (no external I/O)."""
    return LivenessResponse()


@router.get("/z", include_in_schema=False)
async def liveness_alias() -> LivenessResponse:
    return LivenessResponse()


async def _readiness_impl(response: Response, probe: HealthProbe) -> ReadinessResponse:
    """Execute dependency checks concurrently and derive overall readiness.

    Returns HTTP 200 if all checks are "ok"; otherwise HTTP 503.
    """
    loop = asyncio.get_running_loop()

    async def _time(
        name: str,
        fn: Callable[[], Awaitable[tuple[bool, str | None]]],
        observe_seconds: Callable[[float], None],
    ) -> CheckResult:
        start = loop.time()
        ok, detail = await fn()
        duration_ms = (loop.time() - start) * 1000.0
        observe_seconds(duration_ms / 1000.0)
        return CheckResult(
            name=name,
            status="ok" if ok else "down",
            detail=detail,
            duration_ms=duration_ms,
        )

    repo_hist = get_readyz_repository_latency_seconds()
    cache_hist = get_readyz_cache_latency_seconds()

    results = await asyncio.gather(
        _time("repository", probe.repository, repo_hist.observe),
        _time("cache", probe.cache, cache_hist.observe),
    )

    all_ok = all(r.status == "ok" for r in results)
    if not all_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    payload = ReadinessResponse(
        status=HealthState.OK if all_ok else HealthState.DEGRADED,
        checks=list(results),
    )

    logger.info(
        "readiness_probe",
        extra={
            "overall": payload.status.value,
            "checks": [r.model_dump_http() for r in payload.checks],
        },
    )

    slow = [r for r in results if r.duration_ms > 200.0]
    if slow:
        logger.warning(
            "readiness_probe_slow",
            extra={"slow": [r.model_dump_http() for r in slow]},
        )

    return payload


@router.get(
    "/readiness",
    summary="Readiness",
    operation_id="health_readiness",
    response_model=ReadinessResponse,
    responses={503: {"description": "Service degraded", "model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    probe: Annotated[HealthProbe, Depends(probe_provider, use_cache=False)],
) -> ReadinessResponse:
    """Canonical readiness endpoint (published in OpenAPI)."""
    return await _readiness_impl(response, probe)


@router.get("/ready", include_in_schema=False)
async def readiness_alias(
    response: Response,
    probe: Annotated[HealthProbe, Depends(probe_provider, use_cache=False)],
) -> ReadinessResponse:
    return await _readiness_impl(response, probe)
