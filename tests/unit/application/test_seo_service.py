from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import pytest

from seo_api.adapters.repositories.memory_repository import InMemoryRepository
from seo_api.application.services.cache_aside import CacheAside
from seo_api.application.services.seo_service import (
    SEOService,
    seo_from_payload,
    seo_to_payload,
)
from seo_api.domain.entities.seo import SEO
from seo_api.domain.exceptions.metadata import EntityAlreadyExists, EntityNotFound
from seo_api.infrastructure.caching.memory_cache import InMemoryJsonCache


class _CountingRepository(InMemoryRepository):
    def __init__(self) -> None:
        super().__init__()
        self.get_calls = 0

    async def get_seo(self, obj_name: str, obj_pk: str) -> SEO:
        self.get_calls += 1
        return await super().get_seo(obj_name, obj_pk)


class _BrokenRepository(InMemoryRepository):
    async def get_seo(self, obj_name: str, obj_pk: str) -> SEO:
        raise RuntimeError("connection reset by peer")

    async def update_seo(self, seo: SEO) -> SEO:
        raise RuntimeError("connection reset by peer")


class _FailingCache:
    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        raise TimeoutError("redis timeout")

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: int) -> None:
        raise TimeoutError("redis timeout")

    async def delete(self, key: str) -> None:
        raise TimeoutError("redis timeout")

    async def invalidate_pattern(self, pattern: str) -> int:
        raise TimeoutError("redis timeout")


@pytest.fixture
def repo() -> _CountingRepository:
    return _CountingRepository()


@pytest.fixture
def service(repo: _CountingRepository, cache_aside: CacheAside) -> SEOService:
    return SEOService(repo, cache_aside, warm_on_create=False)


@pytest.mark.asyncio
async def test_miss_reads_repository_then_populates_cache(
    service: SEOService,
    repo: _CountingRepository,
    memory_cache: InMemoryJsonCache,
    make_seo: Callable[..., SEO],
) -> None:
    created = await service.create_seo(make_seo())
    assert await memory_cache.get_json("SEO:product:42") is None

    first = await service.get_seo("product", "42")
    second = await service.get_seo("product", "42")

    assert first == created
    assert second == created
    assert repo.get_calls == 1
    cached = await memory_cache.get_json("SEO:product:42")
    assert cached is not None and cached["id"] == created.id


@pytest.mark.asyncio
async def test_create_warms_cache_by_default(
    repo: _CountingRepository,
    cache_aside: CacheAside,
    make_seo: Callable[..., SEO],
) -> None:
    service = SEOService(repo, cache_aside)
    created = await service.create_seo(make_seo())

    assert created.id is not None
    assert await service.get_seo("product", "42") == created
    assert repo.get_calls == 0


@pytest.mark.asyncio
async def test_unknown_record_raises_not_found_and_caches_nothing(
    service: SEOService, memory_cache: InMemoryJsonCache
) -> None:
    with pytest.raises(EntityNotFound) as ei:
        await service.get_seo("product", "404")

    assert ei.value.details == {"obj_name": "product", "obj_pk": "404"}
    assert await memory_cache.get_json("SEO:product:404") is None


@pytest.mark.asyncio
async def test_duplicate_natural_key_is_rejected(
    service: SEOService, make_seo: Callable[..., SEO]
) -> None:
    await service.create_seo(make_seo())

    with pytest.raises(EntityAlreadyExists):
        await service.create_seo(make_seo(title="Other"))


@pytest.mark.asyncio
async def test_update_invalidates_cached_copy(
    service: SEOService,
    repo: _CountingRepository,
    memory_cache: InMemoryJsonCache,
    make_seo: Callable[..., SEO],
) -> None:
    created = await service.create_seo(make_seo())
    await service.get_seo("product", "42")

    updated = await service.update_seo(make_seo(title="Red Widget"))

    assert updated.id == created.id
    assert await memory_cache.get_json("SEO:product:42") is None
    assert (await service.get_seo("product", "42")).title == "Red Widget"
    assert repo.get_calls == 2


@pytest.mark.asyncio
async def test_failed_update_leaves_cache_untouched(
    service: SEOService, memory_cache: InMemoryJsonCache, make_seo: Callable[..., SEO]
) -> None:
    await memory_cache.set_json("SEO:product:9", seo_to_payload(make_seo(obj_pk="9")), ttl=60)

    with pytest.raises(EntityNotFound):
        await service.update_seo(make_seo(obj_pk="9"))

    assert await memory_cache.get_json("SEO:product:9") is not None


@pytest.mark.asyncio
async def test_delete_invalidates_and_record_is_gone(
    service: SEOService, memory_cache: InMemoryJsonCache, make_seo: Callable[..., SEO]
) -> None:
    await service.create_seo(make_seo())
    await service.get_seo("product", "42")

    await service.delete_seo("product", "42")

    assert await memory_cache.get_json("SEO:product:42") is None
    with pytest.raises(EntityNotFound):
        await service.get_seo("product", "42")
    with pytest.raises(EntityNotFound):
        await service.delete_seo("product", "42")


@pytest.mark.asyncio
async def test_reads_and_writes_survive_a_failing_cache(
    repo: _CountingRepository, make_seo: Callable[..., SEO]
) -> None:
    service = SEOService(repo, CacheAside(_FailingCache()))

    created = await service.create_seo(make_seo())
    assert await service.get_seo("product", "42") == created
    await service.update_seo(make_seo(title="Still works"))
    await service.delete_seo("product", "42")

    assert repo.get_calls == 1


@pytest.mark.asyncio
async def test_cancelled_read_does_not_populate(
    cache_aside: CacheAside, memory_cache: InMemoryJsonCache, make_seo: Callable[..., SEO]
) -> None:
    started = asyncio.Event()

    class _SlowRepository(InMemoryRepository):
        async def get_seo(self, obj_name: str, obj_pk: str) -> SEO:
            started.set()
            await asyncio.sleep(10)
            return make_seo()

    service = SEOService(_SlowRepository(), cache_aside)
    task = asyncio.create_task(service.get_seo("product", "42"))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert await memory_cache.get_json("SEO:product:42") is None

@pytest.mark.asyncio
async def test_colliding_cache_keys_never_serve_another_record(
    repo: _CountingRepository, cache_aside: CacheAside, make_seo: Callable[..., SEO]
) -> None:
    service = SEOService(repo, cache_aside)
    first = await service.create_seo(make_seo(obj_name="shop:product", obj_pk="42", title="A"))
    # Same cache key "SEO:shop:product:42"; warming it overwrites the first entry.
    second = await service.create_seo(make_seo(obj_name="shop", obj_pk="product:42", title="B"))

    assert await service.get_seo("shop:product", "42") == first
    assert await service.get_seo("shop", "product:42") == second
    assert await service.get_seo("shop:product", "42") == first
    assert repo.get_calls == 3


@pytest.mark.asyncio
async def test_repository_failures_propagate_unwrapped_and_cache_nothing(
    cache_aside: CacheAside, memory_cache: InMemoryJsonCache, make_seo: Callable[..., SEO]
) -> None:
    service = SEOService(_BrokenRepository(), cache_aside)

    with pytest.raises(RuntimeError, match="connection reset"):
        await service.get_seo("product", "42")
    assert await memory_cache.get_json("SEO:product:42") is None


@pytest.mark.asyncio
async def test_failed_repository_update_keeps_cached_copy(
    cache_aside: CacheAside, memory_cache: InMemoryJsonCache, make_seo: Callable[..., SEO]
) -> None:
    service = SEOService(_BrokenRepository(), cache_aside)
    await memory_cache.set_json("SEO:product:42", seo_to_payload(make_seo()), ttl=60)

    with pytest.raises(RuntimeError):
        await service.update_seo(make_seo(title="Never stored"))

    cached = await memory_cache.get_json("SEO:product:42")
    assert cached is not None and cached["title"] == "Blue Widget"


def test_payload_round_trip_preserves_identity(make_seo: Callable[..., SEO]) -> None:
    from datetime import UTC, datetime

    now = datetime(2026, 10, 19, 8, 30, tzinfo=UTC)
    seo = make_seo().with_identity(id=3, created_at=now, updated_at=now)

    assert seo_from_payload(seo_to_payload(seo)) == seo
