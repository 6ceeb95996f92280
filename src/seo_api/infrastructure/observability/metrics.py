# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Prometheus metrics utilities (registry-aware, hot-reload safe).

Every collector is obtained through an accessor that returns a *singleton*
bound to the **current** ``prometheus_client.REGISTRY``:

    - Safe under hot reload and tests that swap the default registry.
    - No duplicate-registration errors.
    - Cache automatically resets when the active registry changes.

Collectors:
    * Cache operation counter + duration histogram
      (labels: operation, namespace, hit).
    * Metadata operation latency histogram
      (labels: transport, operation, status).
    * Readiness probe latency histograms (repository, cache).

Example:
    get_cache_operations_total().labels(
        operation="get_json", namespace="seo:v1", hit="true"
    ).inc()
"""

from __future__ import annotations

import logging
import threading
from contextlib import suppress
from typing import Final

import prometheus_client as prom
from prometheus_client import Counter, Histogram

_log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Common histogram buckets (seconds)
_BUCKETS: Final[tuple[float, ...]] = (
    0.001,
    0.005,
    0.010,
    0.025,
    0.050,
    0.100,
    0.250,
    0.500,
    1.000,
    2.500,
    5.000,
)

# Cache keyed by metric name within the currently-active registry.
_registry_id: int | None = None
_hist_cache: dict[str, Histogram] = {}
_counter_cache: dict[str, Counter] = {}
_lock = threading.RLock()


# ---------------------------------------------------------------------------
# Registry-handling primitives


def _ensure_registry() -> None:
    """Reset caches if the active registry changed."""
    global _registry_id
    with _lock:
        rid = id(prom.REGISTRY)
        if _registry_id is None or _registry_id != rid:
            _hist_cache.clear()
            _counter_cache.clear()
            _registry_id = rid


def _lookup_existing[C: (Histogram, Counter)](name: str, kind: type[C]) -> C | None:
    """Return a previously-registered collector of ``kind`` from the active registry."""
    with _lock, suppress(Exception):
        mapping = getattr(prom.REGISTRY, "_names_to_collectors", None)
        if isinstance(mapping, dict):
            col = mapping.get(name)
            if isinstance(col, kind):
                return col
    return None


# ---------------------------------------------------------------------------
# Get-or-create helpers


def _get_or_create_hist(
    name: str,
    help_text: str,
    *,
    buckets: tuple[float, ...] = _BUCKETS,
    labelnames: tuple[str, ...] = (),
) -> Histogram:
    """Get or create a registry-bound ``Histogram`` with stable identity.

    Strategy:
    1. Return from module cache if present for the active registry.
    2. If registry already has a collector by this name, reuse it.
    3. Otherwise, register a new collector on the active registry.
    4. If concurrent registration triggers a duplication error, retry step 2.

    Args:
        name: Metric name (snake_case).
        help_text: Human-readable description.
        buckets: Histogram buckets in seconds.
        labelnames: Optional label names tuple.

    Returns:
        Histogram: Bound to ``prom.REGISTRY``.
    """
    _ensure_registry()
    with _lock:
        cached = _hist_cache.get(name)
        if cached is not None:
            return cached

        existing = _lookup_existing(name, Histogram)
        if existing is not None:
            _hist_cache[name] = existing
            return existing

        try:
            h = Histogram(name, help_text, labelnames, buckets=buckets, registry=prom.REGISTRY)
        except ValueError as exc:
            if "Duplicated timeseries" in str(exc):
                again = _lookup_existing(name, Histogram)
                if again is not None:
                    _hist_cache[name] = again
                    return again
            _log.exception("Failed to register Prometheus histogram %s", name)
            raise
        _hist_cache[name] = h
        return h


def _get_or_create_counter(
    name: str,
    help_text: str,
    *,
    labelnames: tuple[str, ...] = (),
) -> Counter:
    """Get or create a registry-bound ``Counter`` with stable identity."""
    _ensure_registry()
    with _lock:
        cached = _counter_cache.get(name)
        if cached is not None:
            return cached

        existing = _lookup_existing(name, Counter)
        if existing is not None:
            _counter_cache[name] = existing
            return existing

        try:
            c = Counter(name, help_text, labelnames, registry=prom.REGISTRY)
        except ValueError as exc:
            if "Duplicated timeseries" in str(exc):
                again = _lookup_existing(name, Counter)
                if again is not None:
                    _counter_cache[name] = again
                    return again
            _log.exception("Failed to register Prometheus counter %s", name)
            raise
        _counter_cache[name] = c
        return c


# ---------------------------------------------------------------------------
# Cache metrics


def get_cache_operations_total() -> Counter:
    """Return the counter of cache operations.

    Labels:
        operation: ``get_json|set_json|delete|invalidate_pattern``.
        namespace: Cache namespace prefix.
        hit: ``true|false`` for reads, ``n/a`` otherwise.
    """
    return _get_or_create_counter(
        name="seo_cache_operations_total",
        help_text="Cache operations by type and outcome",
        labelnames=("operation", "namespace", "hit"),
    )


def get_cache_operation_duration_seconds() -> Histogram:
    """Return the histogram of cache operation latency (same labels as the counter)."""
    return _get_or_create_hist(
        name="seo_cache_operation_duration_seconds",
        help_text="Latency (seconds) of cache operations",
        labelnames=("operation", "namespace", "hit"),
    )


# ---------------------------------------------------------------------------
# Metadata operation metrics


def get_metadata_operation_duration_seconds() -> Histogram:
    """Return the histogram of controller operation latency.

    Labels:
        transport: ``http|rpc``.
        operation: Operation name (e.g. ``seo.get``).
        status: Outcome code (``OK``, ``NOT_FOUND``, ``ALREADY_EXISTS``, ...).
    """
    return _get_or_create_hist(
        name="seo_metadata_operation_duration_seconds",
        help_text="Latency (seconds) of SEO/Page operations by transport and outcome",
        labelnames=("transport", "operation", "status"),
    )


# ---------------------------------------------------------------------------
# Health metrics


def get_readyz_repository_latency_seconds() -> Histogram:
    """Return the repository readiness latency histogram."""
    return _get_or_create_hist(
        name="readyz_repository_latency_seconds",
        help_text="Latency of repository readiness probe (seconds).",
    )


def get_readyz_cache_latency_seconds() -> Histogram:
    """Return the cache readiness latency histogram."""
    return _get_or_create_hist(
        name="readyz_cache_latency_seconds",
        help_text="Latency of cache readiness probe (seconds).",
    )
