"""Combines per-module dependency trees into one project tree."""

from __future__ import annotations

from collections.abc import Iterable

from .models import DependencyNode, DependencyTree, GradleConfiguration, GradleModule


def assemble(
    project_name: str,
    configuration: GradleConfiguration,
    module_trees: Iterable[tuple[GradleModule, DependencyTree]],
) -> DependencyTree:
    """Build a tree with one synthetic root per module and all conflicts merged."""
    roots: list[DependencyNode] = []
    conflicts = []
    for module, tree in module_trees:
        roots.append(
            DependencyNode(project_name, module.name, "module", children=list(tree.roots))
        )
        conflicts.extend(tree.conflicts)
    return DependencyTree(project_name, configuration, roots, conflicts)