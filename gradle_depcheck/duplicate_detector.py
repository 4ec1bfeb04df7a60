"""Finds dependencies that several modules of a project declare."""

from __future__ import annotations

from collections import defaultdict

from .models import DependencyTree, DuplicateDependencyResult, DuplicateKind

_MODULE_MARKER = "module"


def detect_cross_module(tree: DependencyTree) -> list[DuplicateDependencyResult]:
    """Report coordinates that two or more module roots depend on directly, sorted by coordinate."""
    module_nodes = [root for root in tree.roots if root.requested_version == _MODULE_MARKER]
    if len(module_nodes) < 2:
        return []

    by_coordinate: defaultdict[str, list[tuple[str, str]]] = defaultdict(list)
    for module_node in module_nodes:
        for child in module_node.children:
            version = (
                child.resolved_version
                if child.resolved_version is not None
                else child.requested_version
            )
            by_coordinate[child.coordinate()].append((module_node.artifact, version))

    results: list[DuplicateDependencyResult] = []
    for coordinate, entries in by_coordinate.items():
        if len(entries) < 2:
            continue
        has_mismatch = len({version for _, version in entries}) > 1
        results.append(
            DuplicateDependencyResult(
                coordinate=coordinate,
                kind=DuplicateKind.CROSS_MODULE,
                modules=[module for module, _ in entries],
                versions=dict(entries),
                has_version_mismatch=has_mismatch,
                recommendation=(
                    "Version mismatch — standardize"
                    if has_mismatch
                    else "Consolidate to root project"
                ),
            )
        )

    results.sort(key=lambda result: result.coordinate)
    return results