from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


@pytest.mark.anyio
async def test_rpc_roundtrip_over_http(client: AsyncClient, seo_body: dict[str, str]) -> None:
    async with client:
        r = await client.post("/rpc", json={"method": "seo.create", "params": seo_body})
        assert r.status_code == 200
        assert r.json()["error"] is None
        created = r.json()["result"]

        r = await client.post(
            "/rpc",
            json={"method": "seo.get", "params": {"obj_name": "product", "obj_pk": "42"}},
        )
        assert r.json()["result"] == created

        # HTTP and RPC share one controller.
        r = await client.get("/api/seo/product/42")
        assert r.json()["data"]["id"] == created["id"]


@pytest.mark.anyio
async def test_rpc_logical_errors_travel_in_body(client: AsyncClient) -> None:
    async with client:
        r = await client.post(
            "/rpc",
            json={"method": "page.get", "params": {"slug": "nope"}},
            headers={"X-Request-ID": "rpc-1"},
        )

    assert r.status_code == 200
    err = r.json()["error"]
    assert err["code"] == "NOT_FOUND"
    assert err["http_status"] == 404
    assert err["trace_id"] == "rpc-1"


@pytest.mark.anyio
async def test_unknown_method_is_unimplemented(client: AsyncClient) -> None:
    async with client:
        r = await client.post("/rpc", json={"method": "seo.list", "params": {}})

    assert r.status_code == 404
    assert r.json()["error"]["code"] == "UNIMPLEMENTED"


@pytest.mark.anyio
async def test_malformed_envelope_is_422(client: AsyncClient) -> None:
    async with client:
        r = await client.post("/rpc", json={"params": {}})

    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.anyio
async def test_write_methods_require_auth_when_enabled(
    monkeypatch: pytest.MonkeyPatch, client: AsyncClient, seo_body: dict[str, str]
) -> None:
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("AUTH_HS256_SECRET", "test-secret")

    async with client:
        r = await client.post("/rpc", json={"method": "seo.create", "params": seo_body})
        assert r.status_code == 401
        assert r.json()["error"]["code"] == "UNAUTHENTICATED"

        r = await client.post("/rpc", json={"method": "cache.purge", "params": {}})
        assert r.status_code == 401

        # Reads stay open.
        r = await client.post("/rpc", json={"method": "page.list"})
        assert r.status_code == 200
        assert r.json()["result"] == []
