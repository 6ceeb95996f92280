from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from seo_api.adapters.routers.health_router import HealthProbe, probe_provider


class _BadProbe(HealthProbe):
    async def repository(self) -> tuple[bool, str | None]:
        return True, None

    async def cache(self) -> tuple[bool, str | None]:
        return False, "ConnectionError: redis down"


@pytest.mark.anyio
async def test_liveness(client: AsyncClient) -> None:
    async with client:
        r = await client.get("/health/liveness")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}
        assert (await client.get("/health/z")).status_code == 200


@pytest.mark.anyio
async def test_readiness_ok_with_memory_backends(client: AsyncClient) -> None:
    async with client:
        r = await client.get("/health/readiness")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert [c["name"] for c in body["checks"]] == ["repository", "cache"]


@pytest.mark.anyio
async def test_readiness_503_when_degraded(app: FastAPI, client: AsyncClient) -> None:
    app.dependency_overrides[probe_provider] = lambda: _BadProbe()

    async with client:
        r = await client.get("/health/ready")

    assert r.status_code == 503
    body = r.json()
    assert body["status"] == "degraded"
    assert body["checks"][1] == {**body["checks"][1], "status": "down"}


@pytest.mark.anyio
async def test_metrics_exposes_operation_and_readiness_series(
    client: AsyncClient, seo_body: dict[str, str]
) -> None:
    async with client:
        await client.post("/api/seo", json=seo_body)
        await client.get("/api/seo/product/404")
        r = await client.get("/metrics")

    assert r.status_code == 200
    text = r.text
    assert "readyz_repository_latency_seconds_bucket" in text
    assert "readyz_cache_latency_seconds_bucket" in text
    assert 'seo_metadata_operation_duration_seconds_count{operation="seo.get",status="NOT_FOUND",transport="http"}' in text
