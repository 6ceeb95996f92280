# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
In-Memory Metadata Repository (Adapters Layer)

Purpose:
    Process-local implementation of both :class:`SEORepository` and
    :class:`PageRepository` for development and tests. Two dicts are guarded
    by a single ``asyncio.Lock``; SEO ids are assigned monotonically.

Layer: adapters/repositories
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import replace
from datetime import UTC, datetime

from seo_api.domain.entities.page import Page
from seo_api.domain.entities.seo import SEO
from seo_api.domain.interfaces.repositories.errors import RecordAlreadyExists, RecordNotFound


class InMemoryRepository:
    """Concurrency-safe in-memory SEO and Page store.

    Entities are frozen dataclasses, so the stored instances can be returned
    directly without callers being able to mutate repository state.
    """

    def __init__(self) -> None:
        self._seo: dict[tuple[str, str], SEO] = {}
        self._pages: dict[str, Page] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(UTC)

    # ------------------------------------------------------------------ #
    # SEO
    # ------------------------------------------------------------------ #
    async def get_seo(self, obj_name: str, obj_pk: str) -> SEO:
        async with self._lock:
            try:
                return self._seo[(obj_name, obj_pk)]
            except KeyError:
                raise RecordNotFound(f"seo {obj_name}/{obj_pk}") from None

    async def create_seo(self, seo: SEO) -> SEO:
        async with self._lock:
            if seo.natural_key in self._seo:
                raise RecordAlreadyExists(f"seo {seo.obj_name}/{seo.obj_pk}")
            now = self._now()
            stored = seo.with_identity(id=next(self._ids), created_at=now, updated_at=now)
            self._seo[seo.natural_key] = stored
            return stored

    async def update_seo(self, seo: SEO) -> SEO:
        async with self._lock:
            current = self._seo.get(seo.natural_key)
            if current is None:
                raise RecordNotFound(f"seo {seo.obj_name}/{seo.obj_pk}")
            stored = seo.with_identity(
                id=current.id, created_at=current.created_at, updated_at=self._now()
            )
            self._seo[seo.natural_key] = stored
            return stored

    async def delete_seo(self, obj_name: str, obj_pk: str) -> None:
        async with self._lock:
            if self._seo.pop((obj_name, obj_pk), None) is None:
                raise RecordNotFound(f"seo {obj_name}/{obj_pk}")

    # ------------------------------------------------------------------ #
    # Pages
    # ------------------------------------------------------------------ #
    async def list_pages(self) -> list[Page]:
        async with self._lock:
            return [self._pages[slug] for slug in sorted(self._pages)]

    async def get_page(self, slug: str) -> Page:
        async with self._lock:
            try:
                return self._pages[slug]
            except KeyError:
                raise RecordNotFound(f"page {slug}") from None

    async def create_page(self, page: Page) -> Page:
        async with self._lock:
            if page.slug in self._pages:
                raise RecordAlreadyExists(f"page {page.slug}")
            now = self._now()
            stored = replace(page, created_at=now, updated_at=now)
            self._pages[page.slug] = stored
            return stored

    async def update_page(self, slug: str, page: Page) -> Page:
        async with self._lock:
            current = self._pages.get(slug)
            if current is None:
                raise RecordNotFound(f"page {slug}")
            stored = replace(
                current, title=page.title, href=page.href, updated_at=self._now()
            )
            self._pages[slug] = stored
            return stored

    async def delete_page(self, slug: str) -> None:
        async with self._lock:
            if self._pages.pop(slug, None) is None:
                raise RecordNotFound(f"page {slug}")

    async def ping(self) -> bool:
        """Readiness probe; an in-process store is always reachable."""
        return True
