# src/seo_api/application/interfaces/cache_port.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Application Interface: Cache Port.

Synopsis:
    Minimal JSON cache behavior used by the cache-aside services. Enables
    swapping Redis, in-memory, or other cache implementations.

Layer:
    application/interfaces
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class CachePort(Protocol):
    """JSON cache with TTL semantics.

    Implementations must store values as JSON-serializable mappings and apply
    TTL in seconds. A TTL ``<= 0`` means "do not cache". ``None`` from
    :meth:`get_json` is the only not-found signal; backend failures raise.
    """

    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        """Get a JSON-serializable value by key.

        Args:
            key: Cache key (unqualified; implementations apply any namespace).

        Returns:
            Deserialized JSON mapping if present, else ``None``.
        """

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: int) -> None:
        """Set a JSON-serializable value with TTL.

        Args:
            key: Cache key.
            value: JSON-serializable mapping.
            ttl: Time-to-live in seconds.
        """

    async def delete(self, key: str) -> None:
        """Remove a key. Deleting an absent key is not an error."""

    async def invalidate_pattern(self, pattern: str) -> int:
        """Remove every key matching a glob-style ``pattern``.

        Args:
            pattern: Glob pattern over unqualified keys (e.g. ``"SEO:product:*"``).

        Returns:
            Number of keys removed.
        """
