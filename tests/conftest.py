# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import Any

import fakeredis
import fakeredis.aioredis
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Settings are resolved lazily, but keep imports below on the memory backends.
os.environ.setdefault("ENVIRONMENT", "test")

import seo_api.infrastructure.caching.redis_client as redis_client_module  # noqa: E402
from seo_api.adapters.repositories.memory_repository import InMemoryRepository  # noqa: E402
from seo_api.application.services.cache_aside import CacheAside  # noqa: E402
from seo_api.config.settings import get_settings  # noqa: E402
from seo_api.domain.entities.page import Page  # noqa: E402
from seo_api.domain.entities.seo import SEO  # noqa: E402
from seo_api.infrastructure.caching.memory_cache import InMemoryJsonCache  # noqa: E402


@pytest.fixture(autouse=True)
def _test_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Pin every test to ENVIRONMENT=test with memory backends and auth off."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    for name in (
        "REPOSITORY_BACKEND",
        "CACHE_BACKEND",
        "AUTH_ENABLED",
        "AUTH_HS256_SECRET",
        "CACHE_TTL_SECONDS",
        "CACHE_NAMESPACE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Force pytest-anyio to use asyncio (not trio)."""
    return "asyncio"


@pytest.fixture
def fake_redis(monkeypatch: pytest.MonkeyPatch) -> fakeredis.aioredis.FakeRedis:
    """Install an isolated fakeredis client as the process-wide Redis client."""
    client = fakeredis.aioredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
    monkeypatch.setattr(redis_client_module, "_client", client)
    return client


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def memory_cache() -> InMemoryJsonCache:
    return InMemoryJsonCache()


@pytest.fixture
def cache_aside(memory_cache: InMemoryJsonCache) -> CacheAside:
    return CacheAside(memory_cache, ttl=3600)


@pytest.fixture
def make_seo() -> Callable[..., SEO]:
    """Factory for a fully populated SEO record (override any field by keyword)."""

    def _make(**overrides: Any) -> SEO:
        fields: dict[str, Any] = {
            "title": "Blue Widget",
            "description": "The bluest widget",
            "keywords": "widget,blue",
            "og_title": "Blue Widget | Shop",
            "og_description": "Buy the bluest widget",
            "og_image": "https://cdn.example.com/widget.png",
            "obj_name": "product",
            "obj_pk": "42",
        }
        fields.update(overrides)
        return SEO(**fields)

    return _make


@pytest.fixture
def make_page() -> Callable[..., Page]:
    def _make(**overrides: Any) -> Page:
        fields: dict[str, Any] = {"slug": "about", "title": "About", "href": "/about"}
        fields.update(overrides)
        return Page(**fields)

    return _make


@pytest.fixture
def seo_body() -> dict[str, str]:
    """Wire-format SEO request body."""
    return {
        "title": "Blue Widget",
        "description": "The bluest widget",
        "keywords": "widget,blue",
        "OGTitle": "Blue Widget | Shop",
        "OGDescription": "Buy the bluest widget",
        "OGImage": "https://cdn.example.com/widget.png",
        "obj_name": "product",
        "obj_pk": "42",
    }


@pytest.fixture
def app() -> FastAPI:
    from seo_api.main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> AsyncClient:
    """In-process HTTP client (lifespan does not run; components build lazily)."""
    return AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    )
