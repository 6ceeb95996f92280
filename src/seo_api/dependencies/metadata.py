# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Metadata Dependencies (composition root)

Purpose:
    Build the repository, cache and controller selected by Settings and expose
    the process-wide controller to FastAPI handlers.

Selection:
    * REPOSITORY_BACKEND=sql    → SqlSEORepository + SqlPageRepository
    * REPOSITORY_BACKEND=memory → InMemoryRepository (both protocols)
    * CACHE_BACKEND=redis       → RedisJsonCache(namespace=CACHE_NAMESPACE)
    * CACHE_BACKEND=memory      → InMemoryJsonCache
    ENVIRONMENT=test defaults both selectors to memory.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fastapi import FastAPI, Request

from seo_api.adapters.controllers.metadata_controller import MetadataController
from seo_api.adapters.repositories.memory_repository import InMemoryRepository
from seo_api.adapters.repositories.page_repository import SqlPageRepository
from seo_api.adapters.repositories.seo_repository import SqlSEORepository
from seo_api.application.interfaces.cache_port import CachePort
from seo_api.application.services.cache_aside import CacheAside
from seo_api.application.services.page_service import PageService
from seo_api.application.services.seo_service import SEOService
from seo_api.config.settings import CacheBackend, RepositoryBackend, Settings, get_settings
from seo_api.domain.interfaces.repositories.page_repository import PageRepository
from seo_api.domain.interfaces.repositories.seo_repository import SEORepository
from seo_api.infrastructure.caching.json_cache import RedisJsonCache
from seo_api.infrastructure.caching.memory_cache import InMemoryJsonCache
from seo_api.infrastructure.caching.redis_client import get_redis_client
from seo_api.infrastructure.database.session import (
    get_sessionmaker,
    init_engine_and_sessionmaker,
    ping_database,
)
from seo_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

type Probe = Callable[[], Awaitable[object]]


@dataclass
class MetadataComponents:
    """Wired singletons for one application instance."""

    controller: MetadataController
    repository_probe: Probe
    cache_probe: Probe


def build_repositories(settings: Settings) -> tuple[SEORepository, PageRepository, Probe]:
    """Return the SEO repository, Page repository and a readiness probe."""
    if settings.repository_backend is RepositoryBackend.MEMORY:
        repo = InMemoryRepository()
        return repo, repo, repo.ping

    init_engine_and_sessionmaker(settings)
    sessionmaker = get_sessionmaker()
    return SqlSEORepository(sessionmaker), SqlPageRepository(sessionmaker), ping_database


def build_cache(settings: Settings) -> tuple[CachePort, Probe]:
    """Return the cache backend and a readiness probe."""
    if settings.cache_backend is CacheBackend.MEMORY:
        cache = InMemoryJsonCache()
        return cache, cache.ping

    async def _ping_redis() -> object:
        return await get_redis_client().ping()

    return RedisJsonCache(namespace=settings.cache_namespace), _ping_redis


def build_metadata_components(settings: Settings) -> MetadataComponents:
    """Wire repository → cache → services → controller."""
    seo_repo, page_repo, repo_probe = build_repositories(settings)
    cache, cache_probe = build_cache(settings)
    cache_aside = CacheAside(cache, ttl=settings.cache_ttl_s)
    controller = MetadataController(
        seo=SEOService(seo_repo, cache_aside),
        pages=PageService(page_repo, cache_aside),
        cache=cache_aside,
    )
    logger.info(
        "metadata.components_built",
        extra={
            "repository_backend": settings.repository_backend,
            "cache_backend": settings.cache_backend,
            "cache_ttl_s": settings.cache_ttl_s,
        },
    )
    return MetadataComponents(
        controller=controller, repository_probe=repo_probe, cache_probe=cache_probe
    )


def get_metadata_components(app: FastAPI) -> MetadataComponents:
    """Return the app's components, building them when lifespan was skipped."""
    components: MetadataComponents | None = getattr(app.state, "metadata", None)
    if components is None:
        components = build_metadata_components(get_settings())
        app.state.metadata = components
    return components


def get_metadata_controller(request: Request) -> MetadataController:
    """FastAPI dependency returning the controller wired at startup."""
    return get_metadata_components(request.app).controller
