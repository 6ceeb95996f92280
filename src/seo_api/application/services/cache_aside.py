# src/seo_api/application/services/cache_aside.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Cache-Aside Helper (Application Service).

Synopsis:
    Shared key policy, TTL policy and best-effort cache access for the SEO and
    Page services. The repository is the source of truth; the cache holds a
    time-bounded, possibly stale shadow copy.

Fallback policy:
    * ``read``: any cache failure, or a payload that cannot be decoded, is
      logged at DEBUG and reported as a miss.
    * ``populate``: written with the single default TTL; failures are logged
      at WARNING and swallowed.
    * ``invalidate``: called only after a confirmed repository write;
      failures are logged at WARNING and swallowed. The stale entry then
      survives until its TTL expires.
    * Task cancellation (``asyncio.CancelledError``) is never swallowed.

Observability:
    The logger and tracer are injected. Defaults are the module logger
    (rendered by the root JSON handler)
    and the OpenTelemetry API tracer, which is a no-op without an SDK.

Layer:
    application/services
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Tracer

from seo_api.application.interfaces.cache_port import CachePort

__all__ = [
    "DEFAULT_CACHE_TTL_S",
    "CacheAside",
    "seo_cache_key",
    "page_cache_key",
]

#: Single TTL applied to every cached SEO record and Page.
DEFAULT_CACHE_TTL_S = 3600

_log = logging.getLogger(__name__)


def seo_cache_key(obj_name: str, obj_pk: str) -> str:
    """Build the cache key for an SEO record: ``SEO:<obj_name>:<obj_pk>``."""
    return f"SEO:{obj_name}:{obj_pk}"


def page_cache_key(slug: str) -> str:
    """Build the cache key for a Page: ``page:<slug>``."""
    return f"page:{slug}"


class CacheAside:
    """Best-effort wrapper around a :class:`CachePort`.

    Args:
        cache: Cache backend.
        ttl: TTL in seconds for every populated entry.
        logger: Logger for fallback diagnostics.
        tracer: OpenTelemetry tracer used by the services for operation spans.
    """

    def __init__(
        self,
        cache: CachePort,
        *,
        ttl: int = DEFAULT_CACHE_TTL_S,
        logger: logging.Logger | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        self._cache = cache
        self._ttl = ttl
        self._log = logger or _log
        self._tracer = tracer or trace.get_tracer("seo_api")

    @property
    def ttl(self) -> int:
        """TTL (seconds) applied on populate."""
        return self._ttl

    @property
    def logger(self) -> logging.Logger:
        return self._log

    @property
    def tracer(self) -> Tracer:
        return self._tracer

    async def read[T](self, key: str, decode: Callable[[Mapping[str, Any]], T]) -> T | None:
        """Return the decoded cached value for ``key`` or ``None`` on a miss.

        Args:
            key: Cache key.
            decode: Converts the cached mapping back into an entity.

        Returns:
            The decoded value, or ``None`` on miss, backend error or decode error.
        """
        try:
            payload = await self._cache.get_json(key)
        except Exception as exc:
            self._log.debug(
                "cache.read_failed",
                extra={"key": key, "error": type(exc).__name__, "reason": str(exc)},
            )
            return None

        if payload is None:
            return None

        try:
            return decode(payload)
        except (KeyError, TypeError, ValueError) as exc:
            self._log.debug(
                "cache.decode_failed",
                extra={"key": key, "error": type(exc).__name__, "reason": str(exc)},
            )
            return None

    async def populate(self, key: str, payload: Mapping[str, Any]) -> None:
        """Write ``payload`` under ``key`` with the default TTL (best-effort)."""
        try:
            await self._cache.set_json(key, payload, ttl=self._ttl)
        except Exception as exc:
            self._log.warning(
                "cache.populate_failed",
                extra={"key": key, "error": type(exc).__name__, "reason": str(exc)},
            )

    async def invalidate(self, key: str) -> None:
        """Delete ``key`` after a confirmed repository write (best-effort)."""
        try:
            await self._cache.delete(key)
        except Exception as exc:
            self._log.warning(
                "cache.invalidate_failed",
                extra={"key": key, "error": type(exc).__name__, "reason": str(exc)},
            )

    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete every key matching ``pattern`` (best-effort).

        Returns:
            Number of keys removed; ``0`` when the backend failed.
        """
        try:
            return await self._cache.invalidate_pattern(pattern)
        except Exception as exc:
            self._log.warning(
                "cache.invalidate_pattern_failed",
                extra={"pattern": pattern, "error": type(exc).__name__, "reason": str(exc)},
            )
            return 0
