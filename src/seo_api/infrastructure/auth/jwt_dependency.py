# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""JWT (HS256) Authentication Dependency.

Feature-flagged bearer authentication for write operations. When
``AUTH_ENABLED`` is false a synthetic principal is returned and no header is
required.

This module is framework-level and only concerns HTTP-adjacent auth plumbing.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import jwt
from fastapi import HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from seo_api.config.features.auth import AuthSettings, get_auth_settings

__all__ = ["Principal", "authenticate", "auth_required"]


class Principal(BaseModel):
    """Authenticated principal extracted from a verified JWT.

    Attributes:
        sub: Subject claim (user identifier).
        claims: Full claims mapping for downstream uses/auditing.
    """

    model_config = ConfigDict(frozen=True)

    sub: str = ""
    claims: Mapping[str, Any] = Field(default_factory=dict)


def _extract_bearer_token(request: Request) -> str:
    """Extract the raw token from the ``Authorization: Bearer ...`` header.

    Raises:
        HTTPException: 401 on missing/malformed header or empty token.
    """
    auth = (request.headers.get("Authorization") or "").strip()
    if not auth:
        raise HTTPException(status_code=401, detail="authorization header is missing")
    if not auth.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    token = auth.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing token")
    return token


def _decode_hs256(token: str, cfg: AuthSettings) -> Mapping[str, Any]:
    """Decode and validate a JWT signed with HS256.

    Raises:
        HTTPException: 500 if no secret is configured, 401 if the token is invalid.
    """
    if not cfg.hs256_secret:
        raise HTTPException(status_code=500, detail="Auth misconfigured (missing HS256 secret)")
    try:
        return jwt.decode(
            token, cfg.hs256_secret, algorithms=["HS256"], options={"verify_aud": False}
        )
    except jwt.PyJWTError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc


async def authenticate(request: Request) -> Principal:
    """Return the caller's principal, enforcing auth when enabled.

    Raises:
        HTTPException: 401/500 as described in :func:`_decode_hs256`.
    """
    cfg = get_auth_settings()
    if not cfg.enabled:
        return Principal(sub="anonymous", claims={})

    claims = _decode_hs256(_extract_bearer_token(request), cfg)
    return Principal(sub=str(claims.get("sub", "")), claims=claims)


def auth_required() -> Callable[..., Awaitable[Principal]]:
    """Create a FastAPI dependency that enforces authentication."""

    async def _dep(request: Request) -> Principal:
        return await authenticate(request)

    return _dep
