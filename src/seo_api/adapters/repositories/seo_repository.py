# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
SQL SEO Repository (Adapters Layer)

Purpose:
    SQLAlchemy implementation of :class:`SEORepository` over the ``seo``
    table. Natural-key conflicts surface as ``IntegrityError`` on insert and
    become :class:`RecordAlreadyExists`; zero matched rows become
    :class:`RecordNotFound`.

Layer: adapters/repositories
"""

from __future__ import annotations

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError

from seo_api.adapters.repositories.base_repository import BaseRepository
from seo_api.domain.entities.seo import SEO
from seo_api.domain.interfaces.repositories.errors import RecordAlreadyExists, RecordNotFound
from seo_api.infrastructure.database.models.metadata import SEOModel
from seo_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def _to_entity(row: SEOModel) -> SEO:
    return SEO(
        id=row.id,
        title=row.title,
        description=row.description,
        keywords=row.keywords,
        og_title=row.og_title,
        og_description=row.og_description,
        og_image=row.og_image,
        obj_name=row.obj_name,
        obj_pk=row.obj_pk,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlSEORepository(BaseRepository[SEOModel]):
    """SEO repository backed by SQLAlchemy (async)."""

    @staticmethod
    def _by_natural_key(obj_name: str, obj_pk: str) -> Select[tuple[SEOModel]]:
        return select(SEOModel).where(SEOModel.obj_name == obj_name, SEOModel.obj_pk == obj_pk)

    async def get_seo(self, obj_name: str, obj_pk: str) -> SEO:
        async with self.transaction() as session:
            row = await self.fetch_optional(session, self._by_natural_key(obj_name, obj_pk))
            if row is None:
                raise RecordNotFound(f"seo {obj_name}/{obj_pk}")
            return _to_entity(row)

    async def create_seo(self, seo: SEO) -> SEO:
        now = self.utc_now()
        row = SEOModel(
            title=seo.title,
            description=seo.description,
            keywords=seo.keywords,
            og_title=seo.og_title,
            og_description=seo.og_description,
            og_image=seo.og_image,
            obj_name=seo.obj_name,
            obj_pk=seo.obj_pk,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self.transaction() as session:
                session.add(row)
                await session.flush()
                created = _to_entity(row)
        except IntegrityError as exc:
            logger.debug(
                "seo.create_conflict",
                extra={"obj_name": seo.obj_name, "obj_pk": seo.obj_pk},
            )
            raise RecordAlreadyExists(f"seo {seo.obj_name}/{seo.obj_pk}") from exc
        return created

    async def update_seo(self, seo: SEO) -> SEO:
        async with self.transaction() as session:
            row = await self.fetch_optional(session, self._by_natural_key(seo.obj_name, seo.obj_pk))
            if row is None:
                raise RecordNotFound(f"seo {seo.obj_name}/{seo.obj_pk}")
            row.title = seo.title
            row.description = seo.description
            row.keywords = seo.keywords
            row.og_title = seo.og_title
            row.og_description = seo.og_description
            row.og_image = seo.og_image
            row.updated_at = self.utc_now()
            await session.flush()
            return _to_entity(row)

    async def delete_seo(self, obj_name: str, obj_pk: str) -> None:
        async with self.transaction() as session:
            result = await session.execute(
                delete(SEOModel).where(SEOModel.obj_name == obj_name, SEOModel.obj_pk == obj_pk)
            )
            if result.rowcount == 0:
                raise RecordNotFound(f"seo {obj_name}/{obj_pk}")
