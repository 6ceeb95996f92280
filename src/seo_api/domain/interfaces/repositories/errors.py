# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""
Repository Errors (Domain Interfaces)

Purpose:
    Sentinel exceptions raised by repository implementations. They are
    deliberately distinct from the domain exceptions: the controller is the
    single place where ``RecordNotFound``/``RecordAlreadyExists`` become
    ``EntityNotFound``/``EntityAlreadyExists``.

Layer: domain/interfaces/repositories
"""
from __future__ import annotations


class RepositoryError(Exception):
    """Base class for classified repository outcomes."""


class RecordNotFound(RepositoryError):
    """No stored record matches the requested key."""


class RecordAlreadyExists(RepositoryError):
    """A stored record already uses the requested unique key."""
