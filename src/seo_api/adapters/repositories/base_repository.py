# src/seo_api/adapters/repositories/base_repository.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
BaseRepository: shared foundation for SQL repositories.

Purpose:
    Shared mechanics for all SQL repositories:
      * One short session + transaction per repository call.
      * Safe fetch helpers (optional, all).
      * UTC timestamp helpers for audit fields.

Layer: adapters / repositories

Notes:
    * No business logic, no domain decisions.
    * Repositories are shared singletons; they hold a session factory, never
      a session, so concurrent requests never share a connection.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

TModel = TypeVar("TModel")


class BaseRepository(Generic[TModel]):  # noqa: UP046
    """Base class for SQL repositories."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the repository.

        Args:
            sessionmaker: Factory producing sessions bound to the target database.
        """
        self._sessionmaker = sessionmaker

    # ------------------------------------------------------------------
    # Timestamp / audit utilities
    # ------------------------------------------------------------------

    @staticmethod
    def utc_now() -> datetime:
        """Return current UTC time with timezone info."""
        return datetime.now(UTC)

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction committed on clean exit."""
        async with self._sessionmaker() as session, session.begin():
            yield session

    # ------------------------------------------------------------------
    # Fetch helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def fetch_optional(session: AsyncSession, stmt: Select[Any]) -> TModel | None:
        """Return the first scalar row or ``None``."""
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def fetch_all(session: AsyncSession, stmt: Select[Any]) -> Sequence[TModel]:
        """Return all scalar rows."""
        result = await session.execute(stmt)
        return result.scalars().all()
