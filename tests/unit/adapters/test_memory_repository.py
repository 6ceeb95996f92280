from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from seo_api.adapters.repositories.memory_repository import InMemoryRepository
from seo_api.domain.entities.page import Page
from seo_api.domain.entities.seo import SEO
from seo_api.domain.interfaces.repositories.errors import RecordAlreadyExists, RecordNotFound


@pytest.mark.asyncio
async def test_create_assigns_monotonic_ids_and_timestamps(
    repository: InMemoryRepository, make_seo: Callable[..., SEO]
) -> None:
    a = await repository.create_seo(make_seo(obj_pk="1"))
    b = await repository.create_seo(make_seo(obj_pk="2"))

    assert (a.id, b.id) == (1, 2)
    assert a.created_at is not None and a.created_at == a.updated_at


@pytest.mark.asyncio
async def test_update_keeps_id_and_created_at(
    repository: InMemoryRepository, make_seo: Callable[..., SEO]
) -> None:
    created = await repository.create_seo(make_seo())
    updated = await repository.update_seo(make_seo(title="New"))

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.title == "New"
    assert await repository.get_seo("product", "42") == updated


@pytest.mark.asyncio
async def test_seo_error_sentinels(
    repository: InMemoryRepository, make_seo: Callable[..., SEO]
) -> None:
    await repository.create_seo(make_seo())

    with pytest.raises(RecordAlreadyExists):
        await repository.create_seo(make_seo())
    with pytest.raises(RecordNotFound):
        await repository.get_seo("product", "nope")
    with pytest.raises(RecordNotFound):
        await repository.update_seo(make_seo(obj_pk="nope"))
    await repository.delete_seo("product", "42")
    with pytest.raises(RecordNotFound):
        await repository.delete_seo("product", "42")


@pytest.mark.asyncio
async def test_concurrent_creates_of_one_key_admit_exactly_one(
    repository: InMemoryRepository, make_seo: Callable[..., SEO]
) -> None:
    results = await asyncio.gather(
        *(repository.create_seo(make_seo()) for _ in range(10)), return_exceptions=True
    )

    created = [r for r in results if isinstance(r, SEO)]
    conflicts = [r for r in results if isinstance(r, RecordAlreadyExists)]
    assert len(created) == 1
    assert len(conflicts) == 9


@pytest.mark.asyncio
async def test_pages_listed_by_slug_and_slug_is_immutable(
    repository: InMemoryRepository, make_page: Callable[..., Page]
) -> None:
    await repository.create_page(make_page(slug="team", href="/team"))
    await repository.create_page(make_page())

    updated = await repository.update_page("about", make_page(slug="other", title="About us"))

    assert updated.slug == "about"
    assert [p.slug for p in await repository.list_pages()] == ["about", "team"]
    with pytest.raises(RecordNotFound):
        await repository.get_page("other")


@pytest.mark.asyncio
async def test_page_error_sentinels(
    repository: InMemoryRepository, make_page: Callable[..., Page]
) -> None:
    await repository.create_page(make_page())

    with pytest.raises(RecordAlreadyExists):
        await repository.create_page(make_page())
    with pytest.raises(RecordNotFound):
        await repository.update_page("missing", make_page(slug="missing"))
    await repository.delete_page("about")
    with pytest.raises(RecordNotFound):
        await repository.delete_page("about")
