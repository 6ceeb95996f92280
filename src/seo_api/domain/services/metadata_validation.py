# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Metadata Validation (Domain Service)

Purpose:
    Required-field checks applied by transports before an SEO record or Page
    reaches the controller. Each check fails with a short, stable message that
    clients can match on (e.g. ``"missing og title"``).

Layer: domain/services
"""
from __future__ import annotations

from seo_api.domain.entities.page import Page
from seo_api.domain.entities.seo import SEO
from seo_api.domain.exceptions.metadata import MetadataValidationError

__all__ = ["validate_seo", "validate_page"]

# Field order matters: the first blank field determines the reported message.
_SEO_REQUIRED: tuple[tuple[str, str], ...] = (
    ("title", "missing title"),
    ("description", "missing description"),
    ("keywords", "missing keywords"),
    ("og_title", "missing og title"),
    ("og_description", "missing og description"),
    ("og_image", "missing og image"),
    ("obj_name", "missing related obj name"),
    ("obj_pk", "missing related obj pk"),
)

_PAGE_REQUIRED: tuple[tuple[str, str], ...] = (
    ("slug", "missing slug"),
    ("title", "missing title"),
    ("href", "missing href"),
)


def _check(entity: object, required: tuple[tuple[str, str], ...]) -> None:
    for field, message in required:
        value = getattr(entity, field)
        if not isinstance(value, str) or not value.strip():
            raise MetadataValidationError(message, details={"field": field})


def validate_seo(seo: SEO) -> SEO:
    """Ensure every SEO text field and both natural-key fields are non-blank.

    Args:
        seo: Candidate record.

    Returns:
        The same record, for call chaining.

    Raises:
        MetadataValidationError: On the first blank field.
    """
    _check(seo, _SEO_REQUIRED)
    return seo


def validate_page(page: Page) -> Page:
    """Ensure ``slug``, ``title`` and ``href`` are non-blank.

    Raises:
        MetadataValidationError: On the first blank field.
    """
    _check(page, _PAGE_REQUIRED)
    return page
