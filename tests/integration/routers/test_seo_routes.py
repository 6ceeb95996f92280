from __future__ import annotations

import pytest
from httpx import AsyncClient

from seo_api.adapters.repositories.memory_repository import InMemoryRepository


@pytest.mark.anyio
async def test_create_then_get_seo(client: AsyncClient, seo_body: dict[str, str]) -> None:
    async with client:
        r = await client.post("/api/seo", json=seo_body)
        assert r.status_code == 201
        created = r.json()["data"]
        assert created["id"] == 1
        assert created["OGTitle"] == "Blue Widget | Shop"
        assert created["created_at"] is not None

        r = await client.get("/api/seo/product/42")
        assert r.status_code == 200
        assert r.json()["data"] == created


@pytest.mark.anyio
async def test_missing_record_is_404_envelope(client: AsyncClient) -> None:
    async with client:
        r = await client.get("/api/seo/product/404", headers={"X-Request-ID": "req-404"})

    assert r.status_code == 404
    err = r.json()["error"]
    assert err["code"] == "NOT_FOUND"
    assert err["http_status"] == 404
    assert err["trace_id"] == "req-404"
    assert err["details"] == {"obj_name": "product", "obj_pk": "404"}
    assert r.headers["X-Request-ID"] == "req-404"


@pytest.mark.anyio
async def test_duplicate_is_409(client: AsyncClient, seo_body: dict[str, str]) -> None:
    async with client:
        assert (await client.post("/api/seo", json=seo_body)).status_code == 201
        r = await client.post("/api/seo", json=seo_body)

    assert r.status_code == 409
    assert r.json()["error"]["code"] == "ALREADY_EXISTS"


@pytest.mark.anyio
async def test_missing_field_is_400_with_field_message(
    client: AsyncClient, seo_body: dict[str, str]
) -> None:
    body = dict(seo_body)
    del body["OGTitle"]
    async with client:
        r = await client.post("/api/seo", json=body)

    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "INVALID_ARGUMENT"
    assert err["message"] == "missing og title"
    assert err["details"] == {"field": "og_title"}


@pytest.mark.anyio
async def test_wrongly_typed_body_is_422(client: AsyncClient, seo_body: dict[str, str]) -> None:
    async with client:
        r = await client.post("/api/seo", json={**seo_body, "title": ["not", "a", "string"]})

    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.anyio
async def test_update_uses_path_key_and_refreshes_reads(
    client: AsyncClient, seo_body: dict[str, str]
) -> None:
    async with client:
        await client.post("/api/seo", json=seo_body)
        await client.get("/api/seo/product/42")

        r = await client.put(
            "/api/seo/product/42",
            json={**seo_body, "title": "Red Widget", "obj_pk": "999"},
        )
        assert r.status_code == 200
        assert r.json()["data"]["obj_pk"] == "42"

        r = await client.get("/api/seo/product/42")
        assert r.json()["data"]["title"] == "Red Widget"

        r = await client.put("/api/seo/product/7", json=seo_body)
        assert r.status_code == 404


@pytest.mark.anyio
async def test_delete_returns_204_then_404(client: AsyncClient, seo_body: dict[str, str]) -> None:
    async with client:
        await client.post("/api/seo", json=seo_body)

        r = await client.delete("/api/seo/product/42")
        assert r.status_code == 204
        assert r.content == b""

        assert (await client.get("/api/seo/product/42")).status_code == 404
        assert (await client.delete("/api/seo/product/42")).status_code == 404


@pytest.mark.anyio
async def test_unexpected_failure_is_500_without_details(
    monkeypatch: pytest.MonkeyPatch, client: AsyncClient
) -> None:
    async def _boom(self: InMemoryRepository, obj_name: str, obj_pk: str) -> None:
        raise RuntimeError("postgres://admin:hunter2@db/seo unreachable")

    monkeypatch.setattr(InMemoryRepository, "get_seo", _boom)

    async with client:
        r = await client.get("/api/seo/product/42")

    assert r.status_code == 500
    err = r.json()["error"]
    assert err["code"] == "INTERNAL_ERROR"
    assert err["message"] == "Internal server error"
    assert "details" not in err
    assert "hunter2" not in r.text


@pytest.mark.anyio
async def test_path_key_is_whitespace_normalized(
    client: AsyncClient, seo_body: dict[str, str]
) -> None:
    async with client:
        await client.post("/api/seo", json={**seo_body, "obj_pk": " 42 "})

        r = await client.get("/api/seo/product/%2042%20")
        assert r.status_code == 200
        assert r.json()["data"]["obj_pk"] == "42"

        r = await client.put("/api/seo/%20product/42", json={**seo_body, "title": "Red Widget"})
        assert r.status_code == 200
        assert r.json()["data"]["obj_name"] == "product"

        assert (await client.delete("/api/seo/product/42%20")).status_code == 204
