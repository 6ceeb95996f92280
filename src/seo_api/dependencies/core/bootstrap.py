# src/seo_api/dependencies/core/bootstrap.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Core bootstrap for infrastructure (DB, Redis, metadata components).

This module owns the lifecycle of shared infrastructure used by the FastAPI
app. Configuration is read from Settings; the heavy lifting is delegated to
the infrastructure modules.

The single public surface is :func:`bootstrap`, an async context manager that
yields the resolved Settings and the wired metadata components.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI

from seo_api.config.settings import CacheBackend, RepositoryBackend, Settings, get_settings
from seo_api.dependencies.metadata import MetadataComponents, build_metadata_components
from seo_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


@dataclass
class BootstrapState:
    """State yielded by the bootstrap context manager."""

    settings: Settings
    metadata: MetadataComponents


@asynccontextmanager
async def bootstrap(app: FastAPI) -> AsyncGenerator[BootstrapState, None]:
    """Initialize and teardown shared infrastructure.

    Responsibilities:
        * Load application settings.
        * Initialize the DB engine/sessionmaker when the SQL repository is selected.
        * Initialize the Redis client when the Redis cache is selected.
        * Build the repository, cache, services and controller singletons.
        * Ensure all of the above are shut down on exit, even on error.

    Args:
        app: FastAPI application instance.

    Yields:
        BootstrapState: Resolved settings and wired components.
    """
    settings: Settings = get_settings()
    logger.info("bootstrap.start", extra={"environment": settings.environment.value})

    # Imported here so tests can monkeypatch module functions.
    import seo_api.infrastructure.caching.redis_client as redis_client
    import seo_api.infrastructure.database.session as db_session

    use_sql = settings.repository_backend is RepositoryBackend.SQL
    use_redis = settings.cache_backend is CacheBackend.REDIS

    if use_sql:
        db_session.init_engine_and_sessionmaker(settings)
    if use_redis:
        redis_client.init_redis(settings)

    state = BootstrapState(settings=settings, metadata=build_metadata_components(settings))

    try:
        yield state
    finally:
        if use_redis:
            try:
                await redis_client.close_redis()
            except Exception:
                logger.exception("bootstrap.redis_close_failed")

        if use_sql:
            try:
                await db_session.dispose_engine()
            except Exception:
                logger.exception("bootstrap.db_dispose_failed")

        logger.info("bootstrap.stop")
