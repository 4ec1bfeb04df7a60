"""Queries over the nodes and conflicts of a dependency tree."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator

from .models import DependencyConflict, DependencyNode, DependencyTree


def _walk(node: DependencyNode) -> Iterator[DependencyNode]:
    yield node
    for child in node.children:
        yield from _walk(child)


def all_nodes(tree: DependencyTree) -> list[DependencyNode]:
    """Return every node of the tree in depth-first pre-order."""
    return [node for root in tree.roots for node in _walk(root)]


def unique_coordinates(tree: DependencyTree) -> set[str]:
    """Return the set of group:artifact coordinates present in the tree."""
    return {node.coordinate() for node in all_nodes(tree)}


def subtree_sizes(tree: DependencyTree) -> dict[str, int]:
    """Map each coordinate to the largest subtree rooted at one of its nodes."""
    sizes: dict[str, int] = {}
    for node in all_nodes(tree):
        coord = node.coordinate()
        sizes[coord] = max(sizes.get(coord, 0), node.subtree_size())
    return sizes


def conflicts_by_coordinate(tree: DependencyTree) -> dict[str, list[DependencyConflict]]:
    """Group the tree's conflicts by coordinate."""
    grouped: defaultdict[str, list[DependencyConflict]] = defaultdict(list)
    for conflict in tree.conflicts:
        grouped[conflict.coordinate].append(conflict)
    return dict(grouped)