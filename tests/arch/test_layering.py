# tests/arch/test_layering.py
# Copyright (c) SEO API Authors.
# SPDX-License-Identifier: MIT
"""Layering guardrails for the `seo_api` package.

Import-graph policy (grimp):

    domain         → domain
    application    → {domain, application}
    adapters       → {domain, application, adapters, infrastructure, rpc}
    infrastructure → {domain, application, infrastructure}
    rpc            → {domain, application, adapters, infrastructure, rpc}

`config`, `dependencies` and `main` sit outside the matrix. The inner rings
must also stay free of web, database and cache frameworks.
"""

from __future__ import annotations

import ast
from collections.abc import Mapping
from pathlib import Path
from typing import Final

import grimp
from grimp import ImportGraph

ROOT_PACKAGE: Final[str] = "seo_api"
SRC_ROOT: Final[Path] = Path(__file__).resolve().parents[2] / "src" / ROOT_PACKAGE

LAYERS: Final[frozenset[str]] = frozenset(
    {"domain", "application", "adapters", "infrastructure", "rpc"}
)

ALLOWED_DEPENDENCIES: Mapping[str, set[str]] = {
    "domain": {"domain"},
    "application": {"domain", "application"},
    "adapters": {"domain", "application", "adapters", "infrastructure", "rpc"},
    "infrastructure": {"domain", "application", "infrastructure"},
    "rpc": {"domain", "application", "adapters", "infrastructure", "rpc"},
}

# Third-party roots the inner rings must not import.
FRAMEWORK_ROOTS: Final[frozenset[str]] = frozenset(
    {"fastapi", "starlette", "sqlalchemy", "redis", "prometheus_client", "pydantic", "jwt"}
)


def _layer_for_module(module_name: str) -> str | None:
    if not module_name.startswith(f"{ROOT_PACKAGE}."):
        return None
    top = module_name[len(ROOT_PACKAGE) + 1 :].split(".", 1)[0]
    return top if top in LAYERS else None


def _find_layering_violations(graph: ImportGraph) -> list[str]:
    violations: set[str] = set()

    for importer in sorted(graph.modules):
        importer_layer = _layer_for_module(importer)
        if importer_layer is None:
            continue

        allowed_targets = ALLOWED_DEPENDENCIES[importer_layer]
        for imported in graph.find_modules_directly_imported_by(importer):
            imported_layer = _layer_for_module(imported)
            if imported_layer is None:
                continue
            if imported_layer not in allowed_targets:
                violations.add(
                    f"{importer} ({importer_layer}) -> {imported} ({imported_layer}) "
                    "is not allowed by ALLOWED_DEPENDENCIES"
                )

    return sorted(violations)


def _imported_roots(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    roots: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            roots.update(alias.name.split(".", 1)[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            roots.add(node.module.split(".", 1)[0])
    return roots


def test_layering_respects_clean_architecture() -> None:
    graph = grimp.build_graph(ROOT_PACKAGE)
    violations = _find_layering_violations(graph)

    if violations:
        raise AssertionError("Layering violations detected:\n" + "\n".join(violations))


def test_inner_rings_are_framework_free() -> None:
    violations: list[str] = []

    for layer in ("domain", "application"):
        for path in sorted((SRC_ROOT / layer).rglob("*.py")):
            leaked = _imported_roots(path) & FRAMEWORK_ROOTS
            if leaked:
                rel = path.relative_to(SRC_ROOT.parent)
                violations.append(f"{rel} imports {', '.join(sorted(leaked))}")

    if violations:
        raise AssertionError("Framework imports in inner layers:\n" + "\n".join(violations))
