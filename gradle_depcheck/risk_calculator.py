"""Assigns a risk level to each version conflict of a dependency tree."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Protocol

from .errors import RunnerError
from .models import DependencyConflict, DependencyTree, GradleConfiguration, RiskLevel
from .tree_analysis import all_nodes

_U64_MAX = 2**64 - 1
_TRAILING_QUALIFIERS = (".Final", ".RELEASE", "-jre", "-android", "-SNAPSHOT")
_PRERELEASE_PREFIXES = ("beta", "alpha", "rc", "RC", "M")
_BOM_MARKERS = ("(selected by rule)", "(by constraint)")
_LEVELS = list(RiskLevel)


class _InsightRunner(Protocol):
    def run_dependency_insight(
        self, project_path: str, coordinate: str, configuration: GradleConfiguration
    ) -> str: ...


@dataclass(frozen=True, order=True)
class SemVer:
    """The numeric major, minor and patch parts of a version."""

    major: int
    minor: int
    patch: int


def _trim_end(text: str, suffix: str) -> str:
    while text.endswith(suffix):
        text = text[: -len(suffix)]
    return text


def strip_qualifiers(version: str) -> str:
    """Remove known release and pre-release qualifiers from the end of a version."""
    stripped = version
    for qualifier in _TRAILING_QUALIFIERS:
        stripped = _trim_end(stripped, qualifier)
    head, dash, suffix = stripped.rpartition("-")
    if dash and suffix.startswith(_PRERELEASE_PREFIXES):
        return head
    return stripped


def _parse_u64(text: str) -> int | None:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    value = int(digits)
    return value if value <= _U64_MAX else None


def parse_semver(version: str) -> SemVer | None:
    """Parse the first three numeric segments of a version; None if the first is not numeric."""
    parts = strip_qualifiers(version).split(".")
    major = _parse_u64(parts[0])
    if major is None:
        return None
    minor = _parse_u64(parts[1]) if len(parts) > 1 else None
    patch = _parse_u64(parts[2]) if len(parts) > 2 else None
    return SemVer(major, minor or 0, patch or 0)


def _base_risk(requested: SemVer, resolved: SemVer) -> RiskLevel:
    if requested.major != resolved.major:
        return RiskLevel.HIGH
    if requested.minor != resolved.minor:
        return RiskLevel.MEDIUM
    if requested.patch != resolved.patch:
        return RiskLevel.LOW
    return RiskLevel.INFO


def _base_reason(requested: SemVer, resolved: SemVer) -> str:
    if requested.major != resolved.major:
        return f"Major version jump ({requested.major}.x -> {resolved.major}.x)"
    if requested.minor != resolved.minor:
        return (
            f"Minor version jump ({requested.major}.{requested.minor} -> "
            f"{resolved.major}.{resolved.minor})"
        )
    if requested.patch != resolved.patch:
        return (
            f"Patch version bump ({requested.major}.{requested.minor}.{requested.patch} -> "
            f"{resolved.major}.{resolved.minor}.{resolved.patch})"
        )
    return "Qualifier change only"


def _shift_up(level: RiskLevel) -> RiskLevel:
    return _LEVELS[min(_LEVELS.index(level) + 1, len(_LEVELS) - 1)]


def _shift_down(level: RiskLevel) -> RiskLevel:
    return _LEVELS[max(_LEVELS.index(level) - 1, 0)]


def _is_bom_managed_from_tree(tree: DependencyTree, coordinate: str, resolved_version: str) -> bool:
    return any(
        node.is_constraint
        and node.coordinate() == coordinate
        and node.requested_version == resolved_version
        for node in all_nodes(tree)
    )


def _build_bom_set(tree: DependencyTree, runner: _InsightRunner, project_path: str) -> set[str]:
    bom_set: set[str] = set()
    for coordinate in dict.fromkeys(c.coordinate for c in tree.conflicts):
        try:
            output = runner.run_dependency_insight(project_path, coordinate, tree.configuration)
        except RunnerError:
            if any(
                conflict.coordinate == coordinate
                and _is_bom_managed_from_tree(tree, coordinate, conflict.resolved_version)
                for conflict in tree.conflicts
            ):
                bom_set.add(coordinate)
            continue
        lines = output.splitlines()
        if lines and any(marker in lines[0] for marker in _BOM_MARKERS):
            bom_set.add(coordinate)
    return bom_set


def assess_conflicts(
    tree: DependencyTree, runner: _InsightRunner, project_path: str
) -> list[DependencyConflict]:
    """Return the tree's conflicts with risk level and reason filled in.

    BOM management is detected with a dependency insight run per coordinate,
    falling back to constraint nodes in the tree when the run fails.
    """
    is_production = tree.configuration.is_production()
    bom_set = _build_bom_set(tree, runner, project_path)
    assessed: list[DependencyConflict] = []

    for conflict in tree.conflicts:
        requested = parse_semver(conflict.requested_version)
        resolved = parse_semver(conflict.resolved_version)
        parsed = requested is not None and resolved is not None

        if parsed:
            level = _base_risk(requested, resolved)
            reason = _base_reason(requested, resolved)
        else:
            level = RiskLevel.MEDIUM
            reason = (
                f"Unparseable version(s): {conflict.requested_version} -> "
                f"{conflict.resolved_version}"
            )

        if conflict.coordinate in bom_set:
            level = _shift_down(level)
            reason += ", reduced: BOM-managed"
        if parsed and resolved < requested:
            level = _shift_up(level)
            reason += ", downgrade detected"
        if not is_production:
            level = _shift_down(level)
            reason += ", reduced: test scope"

        assessed.append(dataclasses.replace(conflict, risk_level=level, risk_reason=reason))
    return assessed