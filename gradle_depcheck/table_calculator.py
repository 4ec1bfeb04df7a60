"""Flattens a dependency tree into one table row per coordinate."""

from __future__ import annotations

from collections import defaultdict

from .models import DependencyNode, DependencyTree, FlatDependencyEntry
from .tree_analysis import all_nodes


def _effective_version(node: DependencyNode) -> str:
    return node.resolved_version if node.resolved_version is not None else node.requested_version


def parent_map(tree: DependencyTree) -> dict[str, set[str]]:
    """Map each coordinate to the coordinates of the nodes that depend on it."""
    parents: defaultdict[str, set[str]] = defaultdict(set)
    for node in all_nodes(tree):
        parent = node.coordinate()
        for child in node.children:
            parents[child.coordinate()].add(parent)
    return dict(parents)


def flat_entries(tree: DependencyTree) -> list[FlatDependencyEntry]:
    """Return one entry per coordinate, sorted by coordinate."""
    parents = parent_map(tree)
    conflict_coords = {conflict.coordinate for conflict in tree.conflicts}

    by_coordinate: defaultdict[str, list[DependencyNode]] = defaultdict(list)
    for node in all_nodes(tree):
        by_coordinate[node.coordinate()].append(node)

    entries = []
    for coordinate, nodes in by_coordinate.items():
        preferred = next((n for n in nodes if not n.is_omitted), nodes[0])
        has_conflict = coordinate in conflict_coords or any(n.has_conflict() for n in nodes)
        entries.append(
            FlatDependencyEntry(
                coordinate=coordinate,
                group=preferred.group,
                artifact=preferred.artifact,
                version=_effective_version(preferred),
                has_conflict=has_conflict,
                is_omitted=preferred.is_omitted,
                occurrence_count=len(nodes),
                used_by=sorted(parents.get(coordinate, ())),
                versions={_effective_version(n) for n in nodes},
            )
        )

    entries.sort(key=lambda entry: entry.coordinate)
    return entries