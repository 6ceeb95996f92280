# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Page Repository Interface

Purpose:
    Durable-store contract for static pages addressed by slug. Implementations
    must be safe for concurrent use.

Layer: domain/interfaces/repositories
"""
from __future__ import annotations

from typing import Protocol

from seo_api.domain.entities.page import Page


class PageRepository(Protocol):
    """Repository protocol for pages."""

    async def list_pages(self) -> list[Page]:
        """Return every stored page ordered by slug."""
        raise NotImplementedError

    async def get_page(self, slug: str) -> Page:
        """Return the page for ``slug``.

        Raises:
            RecordNotFound: If no page matches.
        """
        raise NotImplementedError

    async def create_page(self, page: Page) -> Page:
        """Persist a new page.

        Raises:
            RecordAlreadyExists: If the slug is already taken.
        """
        raise NotImplementedError

    async def update_page(self, slug: str, page: Page) -> Page:
        """Overwrite ``title``/``href`` of the page at ``slug``; the slug never changes.

        Raises:
            RecordNotFound: If no page matches.
        """
        raise NotImplementedError

    async def delete_page(self, slug: str) -> None:
        """Remove the page at ``slug``.

        Raises:
            RecordNotFound: If no page matches.
        """
        raise NotImplementedError
