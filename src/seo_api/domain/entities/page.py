# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Page Entity

Purpose:
    Immutable domain representation of a static content page addressed by slug.

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from .base import BaseEntity, ensure_utc


@dataclass(frozen=True, slots=True)
class Page(BaseEntity):
    """Static content page.

    Args:
        slug: Globally unique, immutable page identifier.
        title: Human-readable title.
        href: Target URL of the page.
        created_at: Creation timestamp (UTC), set by the repository.
        updated_at: Last update timestamp (UTC), set by the repository.
    """

    slug: str
    title: str
    href: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))
        object.__setattr__(self, "updated_at", ensure_utc(self.updated_at))

    def with_slug(self, slug: str) -> Page:
        """Return a copy addressed by ``slug`` (used when the path wins over the body)."""
        return replace(self, slug=slug)
