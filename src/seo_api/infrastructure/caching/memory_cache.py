# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""In-memory JSON cache for development and tests.

Implements the CachePort Protocol with a dict guarded by an ``asyncio.Lock``.
Entries honour their TTL against the running loop's monotonic clock, and
pattern invalidation uses shell-style globbing (``fnmatch``).
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Mapping
from fnmatch import fnmatchcase
from typing import Any

from seo_api.application.interfaces.cache_port import CachePort


class InMemoryJsonCache(CachePort):
    """A small, concurrency-safe in-memory cache."""

    def __init__(self) -> None:
        self._store: dict[str, tuple[float, dict[str, Any]]] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def _now() -> float:
        return asyncio.get_running_loop().time()

    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        """Return a JSON blob by key if present and not expired."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._now():
                self._store.pop(key, None)
                return None
            return copy.deepcopy(value)

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: int) -> None:
        """Store a JSON-serializable mapping under the given key."""
        if ttl <= 0:
            return
        expires_at = self._now() + float(ttl)
        async with self._lock:
            self._store[key] = (expires_at, copy.deepcopy(dict(value)))

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._store.pop(key, None)

    async def invalidate_pattern(self, pattern: str) -> int:
        async with self._lock:
            doomed = [k for k in self._store if fnmatchcase(k, pattern)]
            for k in doomed:
                del self._store[k]
            return len(doomed)

    async def ping(self) -> bool:
        """Readiness probe; an in-process cache is always reachable."""
        return True
