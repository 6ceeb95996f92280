from __future__ import annotations

import pytest

from seo_api.infrastructure.caching.memory_cache import InMemoryJsonCache


@pytest.mark.asyncio
async def test_set_get_delete(memory_cache: InMemoryJsonCache) -> None:
    await memory_cache.set_json("page:about", {"slug": "about"}, ttl=60)
    assert await memory_cache.get_json("page:about") == {"slug": "about"}

    await memory_cache.delete("page:about")
    await memory_cache.delete("page:about")
    assert await memory_cache.get_json("page:about") is None


@pytest.mark.asyncio
async def test_values_are_copied(memory_cache: InMemoryJsonCache) -> None:
    value = {"tags": ["a"]}
    await memory_cache.set_json("k", value, ttl=60)
    value["tags"].append("b")

    got = await memory_cache.get_json("k")
    assert got == {"tags": ["a"]}


@pytest.mark.asyncio
async def test_entries_expire(
    memory_cache: InMemoryJsonCache, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(memory_cache, "_now", lambda: 1000.0)
    await memory_cache.set_json("k", {"n": 1}, ttl=10)

    monkeypatch.setattr(memory_cache, "_now", lambda: 1009.0)
    assert await memory_cache.get_json("k") == {"n": 1}

    monkeypatch.setattr(memory_cache, "_now", lambda: 1010.0)
    assert await memory_cache.get_json("k") is None


@pytest.mark.asyncio
async def test_non_positive_ttl_is_not_stored(memory_cache: InMemoryJsonCache) -> None:
    await memory_cache.set_json("k", {"n": 1}, ttl=0)
    assert await memory_cache.get_json("k") is None


@pytest.mark.asyncio
async def test_invalidate_pattern_uses_glob(memory_cache: InMemoryJsonCache) -> None:
    for key in ("SEO:product:1", "SEO:product:2", "SEO:article:1", "page:about"):
        await memory_cache.set_json(key, {}, ttl=60)

    assert await memory_cache.invalidate_pattern("SEO:product:*") == 2
    assert await memory_cache.invalidate_pattern("SEO:product:*") == 0
    assert await memory_cache.get_json("SEO:article:1") == {}
