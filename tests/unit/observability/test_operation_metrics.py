from __future__ import annotations

import asyncio

import pytest
from prometheus_client import REGISTRY

from seo_api.domain.exceptions.metadata import EntityNotFound
from seo_api.infrastructure.observability.metrics import (
    get_cache_operations_total,
    get_metadata_operation_duration_seconds,
)
from seo_api.infrastructure.observability.operations import observe_operation, status_of


def _count(operation: str, status: str) -> float:
    value = REGISTRY.get_sample_value(
        "seo_metadata_operation_duration_seconds_count",
        {"transport": "rpc", "operation": operation, "status": status},
    )
    return value or 0.0


def test_status_labels() -> None:
    assert status_of(None) == "OK"
    assert status_of(EntityNotFound("x")) == "NOT_FOUND"
    assert status_of(asyncio.CancelledError()) == "CANCELLED"
    assert status_of(RuntimeError("x")) == "INTERNAL"


@pytest.mark.asyncio
async def test_observe_operation_records_outcome() -> None:
    before_ok = _count("test.ok", "OK")
    before_nf = _count("test.missing", "NOT_FOUND")

    async with observe_operation("rpc", "test.ok"):
        pass
    with pytest.raises(EntityNotFound):
        async with observe_operation("rpc", "test.missing"):
            raise EntityNotFound("missing")

    assert _count("test.ok", "OK") == before_ok + 1
    assert _count("test.missing", "NOT_FOUND") == before_nf + 1


def test_accessors_are_singletons() -> None:
    assert get_cache_operations_total() is get_cache_operations_total()
    assert get_metadata_operation_duration_seconds() is get_metadata_operation_duration_seconds()
