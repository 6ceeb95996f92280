from __future__ import annotations

import dataclasses
from collections.abc import Callable
from datetime import UTC, datetime, timedelta, timezone

import pytest

from seo_api.domain.entities.base import ensure_utc
from seo_api.domain.entities.page import Page
from seo_api.domain.entities.seo import SEO


def test_seo_is_immutable(make_seo: Callable[..., SEO]) -> None:
    seo = make_seo()
    with pytest.raises(dataclasses.FrozenInstanceError):
        seo.title = "changed"  # type: ignore[misc]


def test_natural_key_is_obj_name_and_pk(make_seo: Callable[..., SEO]) -> None:
    assert make_seo(obj_name="article", obj_pk="7").natural_key == ("article", "7")


def test_with_identity_keeps_content(make_seo: Callable[..., SEO]) -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    seo = make_seo().with_identity(id=5, created_at=now, updated_at=now)

    assert seo.id == 5
    assert seo.created_at == now
    assert seo.title == "Blue Widget"


def test_timestamps_are_normalized_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    page = Page(
        slug="about",
        title="About",
        href="/about",
        created_at=datetime(2026, 1, 1, 12, 0, tzinfo=plus_two),
        updated_at=datetime(2026, 1, 1, 12, 0),
    )

    assert page.created_at == datetime(2026, 1, 1, 10, 0, tzinfo=UTC)
    assert page.updated_at is not None and page.updated_at.tzinfo is UTC


def test_ensure_utc_passes_none() -> None:
    assert ensure_utc(None) is None


def test_with_slug_readdresses_page(make_page: Callable[..., Page]) -> None:
    assert make_page().with_slug("team").slug == "team"
