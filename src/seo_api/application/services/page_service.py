# src/seo_api/application/services/page_service.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Service: Static Pages (cache-aside)

Purpose:
    Same cache-aside shape as the SEO service, keyed by ``page:<slug>``.
    Listing is never cached so it always reflects the repository.

Layer: application/services
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from seo_api.application.services.cache_aside import CacheAside, page_cache_key
from seo_api.domain.entities.page import Page
from seo_api.domain.exceptions.metadata import EntityAlreadyExists, EntityNotFound
from seo_api.domain.interfaces.repositories.errors import RecordAlreadyExists, RecordNotFound
from seo_api.domain.interfaces.repositories.page_repository import PageRepository


def page_to_payload(page: Page) -> dict[str, Any]:
    """Serialize a :class:`Page` into a cache-friendly mapping."""
    return {
        "slug": page.slug,
        "title": page.title,
        "href": page.href,
        "created_at": page.created_at.isoformat() if page.created_at else None,
        "updated_at": page.updated_at.isoformat() if page.updated_at else None,
    }


def page_from_payload(payload: Mapping[str, Any]) -> Page:
    """Reconstitute a :class:`Page` from a cached mapping."""
    created_raw = payload.get("created_at")
    updated_raw = payload.get("updated_at")
    return Page(
        slug=str(payload["slug"]),
        title=str(payload["title"]),
        href=str(payload["href"]),
        created_at=datetime.fromisoformat(created_raw) if created_raw else None,
        updated_at=datetime.fromisoformat(updated_raw) if updated_raw else None,
    )


class PageService:
    """Cache-aside orchestration for pages.

    Args:
        repository: Durable page store.
        cache: Best-effort cache wrapper carrying the logger and tracer.
        warm_on_create: Populate the cache with a freshly created page.
    """

    def __init__(
        self,
        repository: PageRepository,
        cache: CacheAside,
        *,
        warm_on_create: bool = True,
    ) -> None:
        self._repo = repository
        self._cache = cache
        self._warm_on_create = warm_on_create

    async def list_pages(self) -> list[Page]:
        """Return every page straight from the repository."""
        with self._cache.tracer.start_as_current_span("page.list") as span:
            pages = await self._repo.list_pages()
            span.set_attribute("page.count", len(pages))
            return pages

    async def get_page(self, slug: str) -> Page:
        """Return the page for ``slug``, cache first.

        Raises:
            EntityNotFound: If the repository has no such page.
        """
        key = page_cache_key(slug)
        with self._cache.tracer.start_as_current_span("page.get") as span:
            span.set_attribute("cache.key", key)

            cached = await self._cache.read(key, page_from_payload)
            if cached is not None:
                span.set_attribute("cache.hit", True)
                return cached
            span.set_attribute("cache.hit", False)

            try:
                page = await self._repo.get_page(slug)
            except RecordNotFound as exc:
                raise EntityNotFound(f"page not found: {slug}", details={"slug": slug}) from exc

            await self._cache.populate(key, page_to_payload(page))
            return page

    async def create_page(self, page: Page) -> Page:
        """Create a page.

        Raises:
            EntityAlreadyExists: If the slug is already taken.
        """
        with self._cache.tracer.start_as_current_span("page.create") as span:
            span.set_attribute("page.slug", page.slug)
            try:
                created = await self._repo.create_page(page)
            except RecordAlreadyExists as exc:
                raise EntityAlreadyExists(
                    f"page already exists: {page.slug}", details={"slug": page.slug}
                ) from exc

            if self._warm_on_create:
                await self._cache.populate(page_cache_key(created.slug), page_to_payload(created))
            return created

    async def update_page(self, slug: str, page: Page) -> Page:
        """Overwrite the page at ``slug``; the addressed slug wins over ``page.slug``.

        Raises:
            EntityNotFound: If no page matches.
        """
        with self._cache.tracer.start_as_current_span("page.update") as span:
            span.set_attribute("page.slug", slug)
            try:
                updated = await self._repo.update_page(slug, page.with_slug(slug))
            except RecordNotFound as exc:
                raise EntityNotFound(f"page not found: {slug}", details={"slug": slug}) from exc

            await self._cache.invalidate(page_cache_key(slug))
            return updated

    async def delete_page(self, slug: str) -> None:
        """Delete the page at ``slug``.

        Raises:
            EntityNotFound: If no page matches.
        """
        with self._cache.tracer.start_as_current_span("page.delete") as span:
            span.set_attribute("page.slug", slug)
            try:
                await self._repo.delete_page(slug)
            except RecordNotFound as exc:
                raise EntityNotFound(f"page not found: {slug}", details={"slug": slug}) from exc

            await self._cache.invalidate(page_cache_key(slug))
