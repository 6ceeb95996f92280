# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""SQL Page Repository (Adapters Layer)."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from seo_api.adapters.repositories.base_repository import BaseRepository
from seo_api.domain.entities.page import Page
from seo_api.domain.interfaces.repositories.errors import RecordAlreadyExists, RecordNotFound
from seo_api.infrastructure.database.models.metadata import PageModel


def _to_entity(row: PageModel) -> Page:
    return Page(
        slug=row.slug,
        title=row.title,
        href=row.href,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlPageRepository(BaseRepository[PageModel]):
    """Page repository backed by SQLAlchemy (async)."""

    async def list_pages(self) -> list[Page]:
        async with self.transaction() as session:
            rows = await self.fetch_all(session, select(PageModel).order_by(PageModel.slug.asc()))
            return [_to_entity(r) for r in rows]

    async def get_page(self, slug: str) -> Page:
        async with self.transaction() as session:
            row = await session.get(PageModel, slug)
            if row is None:
                raise RecordNotFound(f"page {slug}")
            return _to_entity(row)

    async def create_page(self, page: Page) -> Page:
        now = self.utc_now()
        row = PageModel(
            slug=page.slug,
            title=page.title,
            href=page.href,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self.transaction() as session:
                session.add(row)
                await session.flush()
                created = _to_entity(row)
        except IntegrityError as exc:
            raise RecordAlreadyExists(f"page {page.slug}") from exc
        return created

    async def update_page(self, slug: str, page: Page) -> Page:
        async with self.transaction() as session:
            row = await session.get(PageModel, slug)
            if row is None:
                raise RecordNotFound(f"page {slug}")
            row.title = page.title
            row.href = page.href
            row.updated_at = self.utc_now()
            await session.flush()
            return _to_entity(row)

    async def delete_page(self, slug: str) -> None:
        async with self.transaction() as session:
            result = await session.execute(delete(PageModel).where(PageModel.slug == slug))
            if result.rowcount == 0:
                raise RecordNotFound(f"page {slug}")
