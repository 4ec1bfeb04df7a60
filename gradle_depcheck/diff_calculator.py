"""Compares two dependency trees coordinate by coordinate."""

from __future__ import annotations

from .models import (
    ChangeKind,
    DependencyDiffEntry,
    DependencyDiffResult,
    DependencyTree,
)
from .tree_analysis import all_nodes

_Summary = tuple[str, "str | None"]


def _summary_map(tree: DependencyTree) -> dict[str, _Summary]:
    """Map coordinate to (requested, resolved), preferring non-omitted, non-constraint nodes."""
    summary: dict[str, _Summary] = {}
    for node in all_nodes(tree):
        coord = node.coordinate()
        dominated = node.is_omitted or node.is_constraint
        if coord not in summary or not dominated:
            summary[coord] = (node.requested_version, node.resolved_version)
    return summary


def diff(baseline: DependencyTree, current: DependencyTree) -> DependencyDiffResult:
    """Return the changes from the baseline tree to the current tree, sorted by coordinate."""
    before = _summary_map(baseline)
    after = _summary_map(current)
    entries: list[DependencyDiffEntry] = []

    for coord, (before_req, before_res) in before.items():
        if coord in after:
            after_req, after_res = after[coord]
            before_effective = before_res if before_res is not None else before_req
            after_effective = after_res if after_res is not None else after_req
            kind = (
                ChangeKind.UNCHANGED
                if before_effective == after_effective
                else ChangeKind.VERSION_CHANGED
            )
            entries.append(
                DependencyDiffEntry(
                    coordinate=coord,
                    change_kind=kind,
                    before_version=before_req,
                    after_version=after_req,
                    before_resolved_version=before_res,
                    after_resolved_version=after_res,
                )
            )
        else:
            entries.append(
                DependencyDiffEntry(
                    coordinate=coord,
                    change_kind=ChangeKind.REMOVED,
                    before_version=before_req,
                    before_resolved_version=before_res,
                )
            )

    for coord, (after_req, after_res) in after.items():
        if coord not in before:
            entries.append(
                DependencyDiffEntry(
                    coordinate=coord,
                    change_kind=ChangeKind.ADDED,
                    after_version=after_req,
                    after_resolved_version=after_res,
                )
            )

    entries.sort(key=lambda entry: entry.coordinate)
    return DependencyDiffResult(
        baseline_name=baseline.project_name,
        current_name=current.project_name,
        entries=entries,
    )