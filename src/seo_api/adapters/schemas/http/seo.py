# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
SEO HTTP Schemas (Adapters Layer)

Purpose:
    Wire representation of SEO records. Open Graph fields keep their
    established JSON names (``OGTitle``, ``OGDescription``, ``OGImage``);
    Python attributes use snake_case.

Layer: adapters/schemas/http
"""
from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from seo_api.adapters.schemas.http.base import BaseHTTPSchema
from seo_api.domain.entities.seo import SEO

__all__ = ["SEOHTTP", "SEOWriteHTTP"]


class SEOHTTP(BaseHTTPSchema):
    """SEO record as returned to clients."""

    model_config = ConfigDict(title="SEO")

    id: int | None = Field(default=None, description="Repository-assigned identifier.")
    title: str
    description: str
    keywords: str
    og_title: str = Field(..., alias="OGTitle")
    og_description: str = Field(..., alias="OGDescription")
    og_image: str = Field(..., alias="OGImage")
    obj_name: str = Field(..., description="Type name of the described object.")
    obj_pk: str = Field(..., description="Primary key of the described object.")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, seo: SEO) -> SEOHTTP:
        return cls(
            id=seo.id,
            title=seo.title,
            description=seo.description,
            keywords=seo.keywords,
            og_title=seo.og_title,
            og_description=seo.og_description,
            og_image=seo.og_image,
            obj_name=seo.obj_name,
            obj_pk=seo.obj_pk,
            created_at=seo.created_at,
            updated_at=seo.updated_at,
        )


class SEOWriteHTTP(BaseHTTPSchema):
    """Request body for creating or updating an SEO record.

    Fields default to empty so that a missing field is reported by the
    required-field check (``"missing og title"``) instead of a generic schema
    error. Server-owned fields (``id``, timestamps) are ignored when present.
    """

    model_config = ConfigDict(title="SEOWrite", extra="ignore")

    title: str = ""
    description: str = ""
    keywords: str = ""
    og_title: str = Field(default="", alias="OGTitle")
    og_description: str = Field(default="", alias="OGDescription")
    og_image: str = Field(default="", alias="OGImage")
    obj_name: str = ""
    obj_pk: str = ""

    def to_entity(self, *, obj_name: str | None = None, obj_pk: str | None = None) -> SEO:
        """Build a domain entity; explicit ``obj_name``/``obj_pk`` override the body."""
        return SEO(
            title=self.title,
            description=self.description,
            keywords=self.keywords,
            og_title=self.og_title,
            og_description=self.og_description,
            og_image=self.og_image,
            obj_name=obj_name if obj_name is not None else self.obj_name,
            obj_pk=obj_pk if obj_pk is not None else self.obj_pk,
        )
