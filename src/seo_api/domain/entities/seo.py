# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
SEO Entity

Purpose:
    Immutable domain representation of the search/social metadata attached to
    one host-application object (no I/O).

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from .base import BaseEntity, ensure_utc


@dataclass(frozen=True, slots=True)
class SEO(BaseEntity):
    """SEO metadata record.

    The record is addressed by its natural key ``(obj_name, obj_pk)``, which
    is unique across all SEO records. ``id`` is assigned by the repository on
    create and never used to address the record.

    Args:
        title: Page title.
        description: Meta description.
        keywords: Meta keywords.
        og_title: Open Graph title.
        og_description: Open Graph description.
        og_image: Open Graph image URL.
        obj_name: Type name of the described object (e.g. ``"product"``).
        obj_pk: Primary key of the described object, as a string.
        id: Repository-assigned identifier; ``None`` before creation.
        created_at: Creation timestamp (UTC), set by the repository.
        updated_at: Last update timestamp (UTC), set by the repository.
    """

    title: str
    description: str
    keywords: str
    og_title: str
    og_description: str
    og_image: str
    obj_name: str
    obj_pk: str
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))
        object.__setattr__(self, "updated_at", ensure_utc(self.updated_at))

    @property
    def natural_key(self) -> tuple[str, str]:
        """Return the ``(obj_name, obj_pk)`` pair addressing this record."""
        return self.obj_name, self.obj_pk

    def with_identity(
        self,
        *,
        id: int | None,  # noqa: A002
        created_at: datetime | None,
        updated_at: datetime | None,
    ) -> SEO:
        """Return a copy carrying repository-owned identity and audit fields."""
        return replace(self, id=id, created_at=created_at, updated_at=updated_at)
