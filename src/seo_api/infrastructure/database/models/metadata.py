# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""ORM models for SEO records and static pages."""

from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from seo_api.infrastructure.database.models.base import Base, TimestampMixin

__all__ = ["SEOModel", "PageModel"]

# BIGINT identity on Postgres; SQLite only autoincrements INTEGER primary keys.
_ID_TYPE = BigInteger().with_variant(Integer(), "sqlite")


class SEOModel(TimestampMixin, Base):
    """``seo`` table; unique on the natural key ``(obj_name, obj_pk)``."""

    __tablename__ = "seo"
    __table_args__ = (UniqueConstraint("obj_name", "obj_pk"),)

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    keywords: Mapped[str] = mapped_column(Text, nullable=False)
    og_title: Mapped[str] = mapped_column(String(255), nullable=False)
    og_description: Mapped[str] = mapped_column(Text, nullable=False)
    og_image: Mapped[str] = mapped_column(Text, nullable=False)
    obj_name: Mapped[str] = mapped_column(String(128), nullable=False)
    obj_pk: Mapped[str] = mapped_column(String(128), nullable=False)


class PageModel(TimestampMixin, Base):
    """``page`` table keyed by slug."""

    __tablename__ = "page"

    slug: Mapped[str] = mapped_column(String(255), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    href: Mapped[str] = mapped_column(Text, nullable=False)
