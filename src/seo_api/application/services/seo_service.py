# src/seo_api/application/services/seo_service.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Service: SEO Metadata (cache-aside)

Purpose:
    Orchestrate SEO record reads and writes between the repository (source of
    truth) and the shared cache. Reads are cache-first; writes go to the
    repository and then evict the cached copy.

Error contract:
    * ``RecordNotFound`` from the repository becomes :class:`EntityNotFound`.
    * ``RecordAlreadyExists`` becomes :class:`EntityAlreadyExists`.
    * Anything else propagates unchanged and is reported as internal by the
      transports.
    * Cache failures never change an outcome (see ``cache_aside``).

Key collisions:
    ``SEO:<obj_name>:<obj_pk>`` is not injective when either part contains
    ``:`` (``("shop:product", "42")`` and ``("shop", "product:42")`` share a
    key). A cached record is only served when its natural key equals the
    requested pair; otherwise the read falls through to the repository.

Layer: application/services
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from seo_api.application.services.cache_aside import CacheAside, seo_cache_key
from seo_api.domain.entities.seo import SEO
from seo_api.domain.exceptions.metadata import EntityAlreadyExists, EntityNotFound
from seo_api.domain.interfaces.repositories.errors import RecordAlreadyExists, RecordNotFound
from seo_api.domain.interfaces.repositories.seo_repository import SEORepository


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _from_iso(raw: Any) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None


def seo_to_payload(seo: SEO) -> dict[str, Any]:
    """Serialize an :class:`SEO` into a cache-friendly mapping."""
    return {
        "id": seo.id,
        "title": seo.title,
        "description": seo.description,
        "keywords": seo.keywords,
        "og_title": seo.og_title,
        "og_description": seo.og_description,
        "og_image": seo.og_image,
        "obj_name": seo.obj_name,
        "obj_pk": seo.obj_pk,
        "created_at": _iso(seo.created_at),
        "updated_at": _iso(seo.updated_at),
    }


def seo_from_payload(payload: Mapping[str, Any]) -> SEO:
    """Reconstitute an :class:`SEO` from a cached mapping.

    Raises:
        KeyError: If a required field is absent.
        ValueError: If a timestamp is malformed.
    """
    raw_id = payload.get("id")
    return SEO(
        id=int(raw_id) if raw_id is not None else None,
        title=str(payload["title"]),
        description=str(payload["description"]),
        keywords=str(payload["keywords"]),
        og_title=str(payload["og_title"]),
        og_description=str(payload["og_description"]),
        og_image=str(payload["og_image"]),
        obj_name=str(payload["obj_name"]),
        obj_pk=str(payload["obj_pk"]),
        created_at=_from_iso(payload.get("created_at")),
        updated_at=_from_iso(payload.get("updated_at")),
    )


class SEOService:
    """Cache-aside orchestration for SEO records.

    Args:
        repository: Durable SEO store.
        cache: Best-effort cache wrapper carrying the logger and tracer.
        warm_on_create: Populate the cache with a freshly created record.
    """

    def __init__(
        self,
        repository: SEORepository,
        cache: CacheAside,
        *,
        warm_on_create: bool = True,
    ) -> None:
        self._repo = repository
        self._cache = cache
        self._warm_on_create = warm_on_create

    async def get_seo(self, obj_name: str, obj_pk: str) -> SEO:
        """Return the SEO record for ``(obj_name, obj_pk)``, cache first.

        Raises:
            EntityNotFound: If the repository has no such record.
        """
        key = seo_cache_key(obj_name, obj_pk)
        with self._cache.tracer.start_as_current_span("seo.get") as span:
            span.set_attribute("cache.key", key)

            cached = await self._cache.read(key, seo_from_payload)
            if cached is not None and cached.natural_key == (obj_name, obj_pk):
                span.set_attribute("cache.hit", True)
                return cached
            if cached is not None:
                self._cache.logger.debug(
                    "cache.key_collision",
                    extra={"key": key, "cached_key": list(cached.natural_key)},
                )
            span.set_attribute("cache.hit", False)

            try:
                seo = await self._repo.get_seo(obj_name, obj_pk)
            except RecordNotFound as exc:
                raise EntityNotFound(
                    f"seo not found for {obj_name}/{obj_pk}",
                    details={"obj_name": obj_name, "obj_pk": obj_pk},
                ) from exc

            await self._cache.populate(key, seo_to_payload(seo))
            return seo

    async def create_seo(self, seo: SEO) -> SEO:
        """Create a record; the repository assigns ``id``.

        Raises:
            EntityAlreadyExists: If ``(obj_name, obj_pk)`` is already taken.
        """
        with self._cache.tracer.start_as_current_span("seo.create") as span:
            span.set_attribute("seo.obj_name", seo.obj_name)
            try:
                created = await self._repo.create_seo(seo)
            except RecordAlreadyExists as exc:
                raise EntityAlreadyExists(
                    f"seo already exists for {seo.obj_name}/{seo.obj_pk}",
                    details={"obj_name": seo.obj_name, "obj_pk": seo.obj_pk},
                ) from exc

            if self._warm_on_create:
                await self._cache.populate(
                    seo_cache_key(created.obj_name, created.obj_pk), seo_to_payload(created)
                )
            return created

    async def update_seo(self, seo: SEO) -> SEO:
        """Overwrite the record matched by ``(seo.obj_name, seo.obj_pk)``.

        Raises:
            EntityNotFound: If no record matches.
        """
        with self._cache.tracer.start_as_current_span("seo.update") as span:
            span.set_attribute("seo.obj_name", seo.obj_name)
            try:
                updated = await self._repo.update_seo(seo)
            except RecordNotFound as exc:
                raise EntityNotFound(
                    f"seo not found for {seo.obj_name}/{seo.obj_pk}",
                    details={"obj_name": seo.obj_name, "obj_pk": seo.obj_pk},
                ) from exc

            await self._cache.invalidate(seo_cache_key(seo.obj_name, seo.obj_pk))
            return updated

    async def delete_seo(self, obj_name: str, obj_pk: str) -> None:
        """Delete the record for ``(obj_name, obj_pk)``.

        Raises:
            EntityNotFound: If no record matches.
        """
        with self._cache.tracer.start_as_current_span("seo.delete") as span:
            span.set_attribute("seo.obj_name", obj_name)
            try:
                await self._repo.delete_seo(obj_name, obj_pk)
            except RecordNotFound as exc:
                raise EntityNotFound(
                    f"seo not found for {obj_name}/{obj_pk}",
                    details={"obj_name": obj_name, "obj_pk": obj_pk},
                ) from exc

            await self._cache.invalidate(seo_cache_key(obj_name, obj_pk))
