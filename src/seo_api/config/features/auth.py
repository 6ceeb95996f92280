# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Write-auth toggles.

``AUTH_ENABLED`` and ``AUTH_HS256_SECRET`` are read on every call rather than
through the cached application settings, so flipping them takes effect for
the next request. The full ``Settings`` still validates the same pair at
startup.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["AuthSettings", "get_auth_settings"]


class AuthSettings(BaseSettings):
    """Auth view used by ``infrastructure.auth.jwt_dependency``.

    Attributes:
        enabled: Require a bearer token on HTTP writes and RPC write methods.
        hs256_secret: Shared HS256 secret; unused while auth is disabled.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = False
    hs256_secret: str | None = None


def get_auth_settings() -> AuthSettings:
    return AuthSettings()
