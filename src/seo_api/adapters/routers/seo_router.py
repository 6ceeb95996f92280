# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
SEO Router.

Summary:
    CRUD endpoints for SEO records addressed by ``(obj_name, obj_pk)``.

        GET    /api/seo/{obj_name}/{obj_pk}   → 200 SEO
        POST   /api/seo                       → 201 SEO (with assigned id)
        PUT    /api/seo/{obj_name}/{obj_pk}   → 200 SEO
        DELETE /api/seo/{obj_name}/{obj_pk}   → 204

    Write routes require a bearer token when AUTH_ENABLED is set. Domain
    errors propagate to the app-level handlers, which render ErrorEnvelope.

Layer:
    adapters/routers
"""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Response, status

from seo_api.adapters.controllers.metadata_controller import MetadataController
from seo_api.adapters.routers.base_router import BaseRouter
from seo_api.adapters.schemas.http.envelopes import SuccessEnvelope
from seo_api.adapters.schemas.http.seo import SEOHTTP, SEOWriteHTTP
from seo_api.dependencies.metadata import get_metadata_controller
from seo_api.domain.services.metadata_validation import validate_seo
from seo_api.infrastructure.auth.jwt_dependency import auth_required
from seo_api.infrastructure.observability.operations import observe_operation

router = BaseRouter(version="api", resource="seo", tags=["SEO"])

Controller = Annotated[MetadataController, Depends(get_metadata_controller)]
_write_auth = [Depends(auth_required())]


def _seo_key(obj_name: str, obj_pk: str) -> tuple[str, str]:
    """Path key with surrounding whitespace removed, as RPC params and bodies are."""
    return obj_name.strip(), obj_pk.strip()


SEOKey = Annotated[tuple[str, str], Depends(_seo_key)]


@router.get(
    "/{obj_name}/{obj_pk}",
    response_model=SuccessEnvelope[SEOHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Get SEO metadata for an object",
)
async def get_seo(key: SEOKey, controller: Controller) -> SuccessEnvelope[SEOHTTP]:
    """Return the SEO record for ``(obj_name, obj_pk)``, served from cache when warm."""
    async with observe_operation("http", "seo.get"):
        seo = await controller.get_seo(*key)
    return SuccessEnvelope[SEOHTTP](data=SEOHTTP.from_entity(seo))


@router.post(
    "",
    response_model=SuccessEnvelope[SEOHTTP],
    status_code=status.HTTP_201_CREATED,
    responses=BaseRouter.std_error_responses(),
    dependencies=_write_auth,
    summary="Create SEO metadata",
)
async def create_seo(body: SEOWriteHTTP, controller: Controller) -> SuccessEnvelope[SEOHTTP]:
    """Create a record; ``id`` and timestamps are assigned by the repository."""
    async with observe_operation("http", "seo.create"):
        created = await controller.create_seo(validate_seo(body.to_entity()))
    return SuccessEnvelope[SEOHTTP](data=SEOHTTP.from_entity(created))


@router.put(
    "/{obj_name}/{obj_pk}",
    response_model=SuccessEnvelope[SEOHTTP],
    responses=BaseRouter.std_error_responses(),
    dependencies=_write_auth,
    summary="Update SEO metadata",
)
async def update_seo(
    key: SEOKey,
    body: SEOWriteHTTP,
    controller: Controller,
) -> SuccessEnvelope[SEOHTTP]:
    """Overwrite the record addressed by the path; body key fields are ignored."""
    async with observe_operation("http", "seo.update"):
        entity = validate_seo(body.to_entity(obj_name=key[0], obj_pk=key[1]))
        updated = await controller.update_seo(entity)
    return SuccessEnvelope[SEOHTTP](data=SEOHTTP.from_entity(updated))


@router.delete(
    "/{obj_name}/{obj_pk}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=BaseRouter.std_error_responses(),
    dependencies=_write_auth,
    summary="Delete SEO metadata",
)
async def delete_seo(key: SEOKey, controller: Controller) -> Response:
    async with observe_operation("http", "seo.delete"):
        await controller.delete_seo(*key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
