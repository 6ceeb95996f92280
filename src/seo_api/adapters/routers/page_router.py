# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Page Router.

Summary:
    CRUD endpoints for static pages addressed by slug.

        GET    /api/page          → 200 list (never cached)
        GET    /api/page/{slug}   → 200 Page
        POST   /api/page          → 201 Page
        PUT    /api/page/{slug}   → 200 Page (slug is immutable)
        DELETE /api/page/{slug}   → 204

Layer:
    adapters/routers
"""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Response, status

from seo_api.adapters.controllers.metadata_controller import MetadataController
from seo_api.adapters.routers.base_router import BaseRouter
from seo_api.adapters.schemas.http.envelopes import SuccessEnvelope
from seo_api.adapters.schemas.http.page import PageHTTP, PageWriteHTTP
from seo_api.dependencies.metadata import get_metadata_controller
from seo_api.domain.services.metadata_validation import validate_page
from seo_api.infrastructure.auth.jwt_dependency import auth_required
from seo_api.infrastructure.observability.operations import observe_operation

router = BaseRouter(version="api", resource="page", tags=["Pages"])

Controller = Annotated[MetadataController, Depends(get_metadata_controller)]
_write_auth = [Depends(auth_required())]


def _slug(slug: str) -> str:
    return slug.strip()


Slug = Annotated[str, Depends(_slug)]


@router.get(
    "",
    response_model=SuccessEnvelope[list[PageHTTP]],
    responses=BaseRouter.std_error_responses(),
    summary="List pages",
)
async def list_pages(controller: Controller) -> SuccessEnvelope[list[PageHTTP]]:
    async with observe_operation("http", "page.list"):
        pages = await controller.list_pages()
    return SuccessEnvelope[list[PageHTTP]](data=[PageHTTP.from_entity(p) for p in pages])


@router.get(
    "/{slug}",
    response_model=SuccessEnvelope[PageHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Get a page",
)
async def get_page(slug: Slug, controller: Controller) -> SuccessEnvelope[PageHTTP]:
    async with observe_operation("http", "page.get"):
        page = await controller.get_page(slug)
    return SuccessEnvelope[PageHTTP](data=PageHTTP.from_entity(page))


@router.post(
    "",
    response_model=SuccessEnvelope[PageHTTP],
    status_code=status.HTTP_201_CREATED,
    responses=BaseRouter.std_error_responses(),
    dependencies=_write_auth,
    summary="Create a page",
)
async def create_page(body: PageWriteHTTP, controller: Controller) -> SuccessEnvelope[PageHTTP]:
    async with observe_operation("http", "page.create"):
        created = await controller.create_page(validate_page(body.to_entity()))
    return SuccessEnvelope[PageHTTP](data=PageHTTP.from_entity(created))


@router.put(
    "/{slug}",
    response_model=SuccessEnvelope[PageHTTP],
    responses=BaseRouter.std_error_responses(),
    dependencies=_write_auth,
    summary="Update a page",
)
async def update_page(
    slug: Slug, body: PageWriteHTTP, controller: Controller
) -> SuccessEnvelope[PageHTTP]:
    """Overwrite ``title``/``href`` of the page at ``slug``."""
    async with observe_operation("http", "page.update"):
        updated = await controller.update_page(slug, validate_page(body.to_entity(slug=slug)))
    return SuccessEnvelope[PageHTTP](data=PageHTTP.from_entity(updated))


@router.delete(
    "/{slug}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=BaseRouter.std_error_responses(),
    dependencies=_write_auth,
    summary="Delete a page",
)
async def delete_page(slug: Slug, controller: Controller) -> Response:
    async with observe_operation("http", "page.delete"):
        await controller.delete_page(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
