# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Metadata Controller (Adapters Layer)

Purpose:
    Handler-facing contract shared by the HTTP and RPC transports: one method
    per CRUD operation per entity type, delegating to the SEO and Page
    services.

Layer: adapters/controllers
"""

from __future__ import annotations

from seo_api.adapters.controllers.base import BaseController
from seo_api.application.services.cache_aside import CacheAside
from seo_api.application.services.page_service import PageService
from seo_api.application.services.seo_service import SEOService
from seo_api.domain.entities.page import Page
from seo_api.domain.entities.seo import SEO


class MetadataController(BaseController):
    """Facade over the SEO and Page services."""

    __slots__ = ("_seo", "_pages", "_cache")

    def __init__(self, *, seo: SEOService, pages: PageService, cache: CacheAside) -> None:
        self._seo = seo
        self._pages = pages
        self._cache = cache

    # ------------------------------------------------------------------ #
    # SEO
    # ------------------------------------------------------------------ #
    async def get_seo(self, obj_name: str, obj_pk: str) -> SEO:
        return await self._seo.get_seo(obj_name, obj_pk)

    async def create_seo(self, seo: SEO) -> SEO:
        return await self._seo.create_seo(seo)

    async def update_seo(self, seo: SEO) -> SEO:
        return await self._seo.update_seo(seo)

    async def delete_seo(self, obj_name: str, obj_pk: str) -> None:
        await self._seo.delete_seo(obj_name, obj_pk)

    # ------------------------------------------------------------------ #
    # Pages
    # ------------------------------------------------------------------ #
    async def list_pages(self) -> list[Page]:
        return await self._pages.list_pages()

    async def get_page(self, slug: str) -> Page:
        return await self._pages.get_page(slug)

    async def create_page(self, page: Page) -> Page:
        return await self._pages.create_page(page)

    async def update_page(self, slug: str, page: Page) -> Page:
        return await self._pages.update_page(slug, page)

    async def delete_page(self, slug: str) -> None:
        await self._pages.delete_page(slug)

    # ------------------------------------------------------------------ #
    # Cache administration
    # ------------------------------------------------------------------ #
    async def purge_cache(self, pattern: str) -> int:
        """Evict cached entries matching ``pattern`` (e.g. ``"SEO:product:*"``).

        Returns:
            Number of evicted keys.
        """
        return await self._cache.invalidate_pattern(pattern)
