from __future__ import annotations

from collections.abc import Callable

import pytest

from seo_api.domain.entities.page import Page
from seo_api.domain.entities.seo import SEO
from seo_api.domain.exceptions.metadata import MetadataValidationError
from seo_api.domain.services.metadata_validation import validate_page, validate_seo


def test_complete_seo_passes_through(make_seo: Callable[..., SEO]) -> None:
    seo = make_seo()
    assert validate_seo(seo) is seo


@pytest.mark.parametrize(
    ("field", "message"),
    [
        ("title", "missing title"),
        ("description", "missing description"),
        ("keywords", "missing keywords"),
        ("og_title", "missing og title"),
        ("og_description", "missing og description"),
        ("og_image", "missing og image"),
        ("obj_name", "missing related obj name"),
        ("obj_pk", "missing related obj pk"),
    ],
)
def test_blank_seo_field_is_rejected(
    make_seo: Callable[..., SEO], field: str, message: str
) -> None:
    with pytest.raises(MetadataValidationError) as ei:
        validate_seo(make_seo(**{field: "   "}))

    assert str(ei.value) == message
    assert ei.value.code == "INVALID_ARGUMENT"
    assert ei.value.details == {"field": field}


def test_first_missing_seo_field_wins(make_seo: Callable[..., SEO]) -> None:
    with pytest.raises(MetadataValidationError, match="missing og title"):
        validate_seo(make_seo(og_title="", og_image="", obj_pk=""))


@pytest.mark.parametrize(
    ("field", "message"),
    [("slug", "missing slug"), ("title", "missing title"), ("href", "missing href")],
)
def test_blank_page_field_is_rejected(
    make_page: Callable[..., Page], field: str, message: str
) -> None:
    with pytest.raises(MetadataValidationError, match=message):
        validate_page(make_page(**{field: ""}))
