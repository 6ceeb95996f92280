# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Page HTTP Schemas (Adapters Layer)."""
from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict

from seo_api.adapters.schemas.http.base import BaseHTTPSchema
from seo_api.domain.entities.page import Page

__all__ = ["PageHTTP", "PageWriteHTTP"]


class PageHTTP(BaseHTTPSchema):
    """Page as returned to clients."""

    model_config = ConfigDict(title="Page")

    slug: str
    title: str
    href: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, page: Page) -> PageHTTP:
        return cls(
            slug=page.slug,
            title=page.title,
            href=page.href,
            created_at=page.created_at,
            updated_at=page.updated_at,
        )


class PageWriteHTTP(BaseHTTPSchema):
    """Request body for creating or updating a page.

    On update the slug comes from the path; any slug in the body is ignored.
    """

    model_config = ConfigDict(title="PageWrite", extra="ignore")

    slug: str = ""
    title: str = ""
    href: str = ""

    def to_entity(self, *, slug: str | None = None) -> Page:
        return Page(slug=slug if slug is not None else self.slug, title=self.title, href=self.href)
