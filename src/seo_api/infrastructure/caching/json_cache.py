# src/seo_api/infrastructure/caching/json_cache.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""JSON Cache (Redis-backed).

Synopsis:
    Thin adapter that implements the application CachePort Protocol on top of
    the shared Redis client provided by `infrastructure/caching/redis_client.py`.
    Provides namespaced JSON get/set with TTL, single-key delete and
    pattern-based invalidation.

Design:
    * Uses the global Redis client via `get_redis_client()`.
    * Pure JSON (utf-8) serialization; no pickle.
    * Key policy:
        - Namespace prefix owns the service + version: `seo:v1`
        - Callers provide the entity-specific tail: `SEO:product:42`, `page:about`
    * Pattern invalidation walks `SCAN MATCH` cursors and deletes in batches;
      it never uses `KEYS`.

Layer:
    infrastructure/caching

See Also:
    - seo_api.infrastructure.caching.redis_client
    - seo_api.application.interfaces.cache_port.CachePort
"""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from contextlib import suppress
from typing import Any

from seo_api.application.interfaces.cache_port import CachePort
from seo_api.infrastructure.caching.redis_client import get_redis_client
from seo_api.infrastructure.observability.metrics import (
    get_cache_operation_duration_seconds,
    get_cache_operations_total,
)

__all__ = ["RedisJsonCache", "SCAN_BATCH_SIZE"]

#: Keys requested per SCAN round-trip during pattern invalidation.
SCAN_BATCH_SIZE = 100


class RedisJsonCache(CachePort):
    """Redis-backed implementation of the CachePort Protocol.

    Keys are stored as ``{namespace}:{tail}``; callers only ever see tails.
    """

    def __init__(self, *, namespace: str = "seo:v1") -> None:
        """Initialize the cache adapter.

        Args:
            namespace: Prefix applied to all keys to avoid collisions.
        """
        self._ns = namespace

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _k(self, key: str) -> str:
        """Build a namespaced key from an unqualified tail."""
        key = key.lstrip(":")
        return f"{self._ns}:{key}" if self._ns else key

    def _observe(self, operation: str, hit: str, start: float) -> None:
        duration = time.perf_counter() - start
        with suppress(Exception):
            get_cache_operation_duration_seconds().labels(
                operation=operation, namespace=self._ns, hit=hit
            ).observe(duration)
            get_cache_operations_total().labels(
                operation=operation, namespace=self._ns, hit=hit
            ).inc()

    # ------------------------------------------------------------------ #
    # CachePort implementation
    # ------------------------------------------------------------------ #
    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        """Get a JSON-serialized value by key.

        Args:
            key: Unqualified cache key.

        Returns:
            Deserialized mapping if present, else None.
        """
        start = time.perf_counter()
        hit_label = "false"
        try:
            raw = await get_redis_client().get(self._k(key))
            if raw is None:
                return None
            hit_label = "true"
            value = json.loads(raw)
            if not isinstance(value, dict):
                raise ValueError(f"cached value for {key!r} is not a JSON object")
            return value
        finally:
            self._observe("get_json", hit_label, start)

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: int) -> None:
        """Set a JSON-serialized value with TTL.

        Args:
            key: Unqualified cache key.
            value: JSON-serializable mapping.
            ttl: Time-to-live in seconds.
        """
        start = time.perf_counter()
        try:
            if ttl <= 0:
                return
            await get_redis_client().set(self._k(key), json.dumps(value), ex=ttl)
        finally:
            self._observe("set_json", "n/a", start)

    async def delete(self, key: str) -> None:
        """Delete a single key."""
        start = time.perf_counter()
        try:
            await get_redis_client().delete(self._k(key))
        finally:
            self._observe("delete", "n/a", start)

    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete every key whose tail matches the glob ``pattern``.

        Args:
            pattern: Glob over unqualified keys (e.g. ``"page:*"``).

        Returns:
            Number of keys deleted.
        """
        start = time.perf_counter()
        redis = get_redis_client()
        removed = 0
        try:
            cursor = 0
            while True:
                cursor, keys = await redis.scan(
                    cursor=cursor, match=self._k(pattern), count=SCAN_BATCH_SIZE
                )
                if keys:
                    removed += int(await redis.delete(*keys))
                if cursor == 0:
                    break
            return removed
        finally:
            self._observe("invalidate_pattern", "n/a", start)
