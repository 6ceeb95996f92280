from __future__ import annotations

import datetime as dt

import jwt
import pytest
from httpx import AsyncClient

_SECRET = "test-secret"


def _token(secret: str = _SECRET, minutes: int = 5) -> str:
    now = dt.datetime.now(dt.UTC)
    return jwt.encode(
        {"sub": "editor-1", "iat": now, "exp": now + dt.timedelta(minutes=minutes)},
        secret,
        algorithm="HS256",
    )


@pytest.fixture
def _auth_on(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("AUTH_HS256_SECRET", _SECRET)


@pytest.mark.anyio
@pytest.mark.usefixtures("_auth_on")
async def test_writes_without_token_are_401(
    client: AsyncClient, seo_body: dict[str, str]
) -> None:
    async with client:
        r = await client.post("/api/seo", json=seo_body)
        assert r.status_code == 401
        assert r.json()["error"]["message"] == "authorization header is missing"

        r = await client.delete("/api/page/about", headers={"Authorization": "Basic abc"})
        assert r.status_code == 401


@pytest.mark.anyio
@pytest.mark.usefixtures("_auth_on")
async def test_bad_signature_is_401(client: AsyncClient, seo_body: dict[str, str]) -> None:
    async with client:
        r = await client.post(
            "/api/seo",
            json=seo_body,
            headers={"Authorization": f"Bearer {_token('other-secret')}"},
        )

    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Invalid token"


@pytest.mark.anyio
@pytest.mark.usefixtures("_auth_on")
async def test_valid_token_allows_writes_and_reads_stay_open(
    client: AsyncClient, seo_body: dict[str, str]
) -> None:
    async with client:
        r = await client.post(
            "/api/seo", json=seo_body, headers={"Authorization": f"Bearer {_token()}"}
        )
        assert r.status_code == 201

        assert (await client.get("/api/seo/product/42")).status_code == 200
        assert (await client.get("/api/page")).status_code == 200
