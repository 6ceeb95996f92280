# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
SEO Repository Interface

Purpose:
    Durable-store contract for SEO records addressed by the natural key
    ``(obj_name, obj_pk)``. Implementations must be safe for concurrent use.

Layer: domain/interfaces/repositories
"""
from __future__ import annotations

from typing import Protocol

from seo_api.domain.entities.seo import SEO


class SEORepository(Protocol):
    """Repository protocol for SEO records."""

    async def get_seo(self, obj_name: str, obj_pk: str) -> SEO:
        """Return the record for the natural key.

        Raises:
            RecordNotFound: If no record matches.
        """
        raise NotImplementedError

    async def create_seo(self, seo: SEO) -> SEO:
        """Persist a new record and return it with its assigned ``id``.

        Raises:
            RecordAlreadyExists: If ``(obj_name, obj_pk)`` is already taken.
        """
        raise NotImplementedError

    async def update_seo(self, seo: SEO) -> SEO:
        """Overwrite the record matching ``seo.natural_key``.

        Raises:
            RecordNotFound: If no record matches.
        """
        raise NotImplementedError

    async def delete_seo(self, obj_name: str, obj_pk: str) -> None:
        """Remove the record for the natural key.

        Raises:
            RecordNotFound: If no record matches.
        """
        raise NotImplementedError
