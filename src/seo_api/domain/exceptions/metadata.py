# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Metadata Domain Exceptions

Purpose:
    Classified outcomes of SEO/Page operations. Transports map these to
    HTTP statuses and RPC status codes; every other exception is treated as
    an internal error.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError


class EntityNotFound(DomainError):
    """The addressed SEO record or Page does not exist."""

    code = "NOT_FOUND"


class EntityAlreadyExists(DomainError):
    """A record with the same natural key (or slug) already exists."""

    code = "ALREADY_EXISTS"


class MetadataValidationError(DomainError):
    """Input failed a required-field check before reaching the controller."""

    code = "INVALID_ARGUMENT"
