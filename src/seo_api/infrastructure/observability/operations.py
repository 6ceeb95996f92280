# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Per-operation latency observation for the HTTP and RPC transports."""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress

from seo_api.domain.exceptions.base import DomainError
from seo_api.infrastructure.observability.metrics import get_metadata_operation_duration_seconds

__all__ = ["observe_operation", "status_of"]


def status_of(exc: BaseException | None) -> str:
    """Return the outcome label for an operation that raised ``exc`` (or ``OK``)."""
    if exc is None:
        return "OK"
    if isinstance(exc, DomainError):
        return exc.code
    if isinstance(exc, asyncio.CancelledError):
        return "CANCELLED"
    return "INTERNAL"


@asynccontextmanager
async def observe_operation(transport: str, operation: str) -> AsyncIterator[None]:
    """Record the latency and outcome of one controller operation.

    Exceptions are re-raised untouched; only the metric label reflects them.
    """
    start = time.perf_counter()
    outcome: BaseException | None = None
    try:
        yield
    except BaseException as exc:
        outcome = exc
        raise
    finally:
        duration = time.perf_counter() - start
        with suppress(Exception):
            get_metadata_operation_duration_seconds().labels(
                transport=transport,
                operation=operation,
                status=status_of(outcome),
            ).observe(duration)
