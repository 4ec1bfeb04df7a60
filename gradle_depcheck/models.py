"""Data model for Gradle dependency trees and analysis results."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


def _new_id(group: str, artifact: str, version: str) -> str:
    return f"{group}:{artifact}:{version}:{uuid.uuid4().hex}"


def _require(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


class GradleConfiguration(Enum):
    """A Gradle dependency configuration."""

    COMPILE_CLASSPATH = "compileClasspath"
    RUNTIME_CLASSPATH = "runtimeClasspath"
    IMPLEMENTATION_DEPENDENCIES_METADATA = "implementationDependenciesMetadata"
    TEST_COMPILE_CLASSPATH = "testCompileClasspath"
    TEST_RUNTIME_CLASSPATH = "testRuntimeClasspath"
    ANNOTATION_PROCESSOR = "annotationProcessor"
    COMPILE_ONLY = "compileOnly"
    RUNTIME_ONLY = "runtimeOnly"
    IMPLEMENTATION = "implementation"
    TEST_IMPLEMENTATION = "testImplementation"
    API = "api"

    @classmethod
    def from_name(cls, name: str) -> GradleConfiguration | None:
        """Return the configuration with this Gradle name, or None."""
        try:
            return cls(name)
        except ValueError:
            return None

    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def is_production(self) -> bool:
        return self in _PRODUCTION

    def __str__(self) -> str:
        return self.value


_DISPLAY_NAMES = {
    GradleConfiguration.COMPILE_CLASSPATH: "Compile Classpath",
    GradleConfiguration.RUNTIME_CLASSPATH: "Runtime Classpath",
    GradleConfiguration.IMPLEMENTATION_DEPENDENCIES_METADATA: "Implementation Dependencies Metadata",
    GradleConfiguration.TEST_COMPILE_CLASSPATH: "Test Compile Classpath",
    GradleConfiguration.TEST_RUNTIME_CLASSPATH: "Test Runtime Classpath",
    GradleConfiguration.ANNOTATION_PROCESSOR: "Annotation Processor",
    GradleConfiguration.COMPILE_ONLY: "Compile Only",
    GradleConfiguration.RUNTIME_ONLY: "Runtime Only",
    GradleConfiguration.IMPLEMENTATION: "Implementation",
    GradleConfiguration.TEST_IMPLEMENTATION: "Test Implementation",
    GradleConfiguration.API: "API",
}

_PRODUCTION = frozenset(
    {
        GradleConfiguration.COMPILE_CLASSPATH,
        GradleConfiguration.RUNTIME_CLASSPATH,
        GradleConfiguration.IMPLEMENTATION,
        GradleConfiguration.RUNTIME_ONLY,
        GradleConfiguration.COMPILE_ONLY,
        GradleConfiguration.API,
    }
)


@dataclass
class DependencyNode:
    """One dependency in a resolved tree."""

    group: str
    artifact: str
    requested_version: str
    resolved_version: str | None = None
    is_omitted: bool = False
    is_constraint: bool = False
    children: list[DependencyNode] = field(default_factory=list)
    id: str = field(default="", compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.id:
            self.id = _new_id(self.group, self.artifact, self.requested_version)

    def coordinate(self) -> str:
        return f"{self.group}:{self.artifact}"

    def has_conflict(self) -> bool:
        return self.resolved_version is not None and self.resolved_version != self.requested_version

    def display_version(self) -> str:
        if self.resolved_version is None:
            return self.requested_version
        return f"{self.requested_version} -> {self.resolved_version}"

    def subtree_size(self) -> int:
        return 1 + sum(child.subtree_size() for child in self.children)

    def assign_ids(self) -> None:
        """Give this node and its descendants an id where they have none."""
        if not self.id:
            self.id = _new_id(self.group, self.artifact, self.requested_version)
        for child in self.children:
            child.assign_ids()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "group": self.group,
            "artifact": self.artifact,
            "requestedVersion": self.requested_version,
        }
        if self.resolved_version is not None:
            data["resolvedVersion"] = self.resolved_version
        data["isOmitted"] = self.is_omitted
        data["isConstraint"] = self.is_constraint
        data["children"] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DependencyNode:
        return cls(
            group=_require(data, "group"),
            artifact=_require(data, "artifact"),
            requested_version=_require(data, "requestedVersion"),
            resolved_version=data.get("resolvedVersion"),
            is_omitted=bool(_require(data, "isOmitted")),
            is_constraint=bool(_require(data, "isConstraint")),
            children=[cls.from_dict(child) for child in _require(data, "children")],
        )


class RiskLevel(Enum):
    """Risk attached to a version conflict, from least to most severe."""

    INFO = "INFO"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DependencyConflict:
    """A requested version that Gradle resolved to another version."""

    coordinate: str
    requested_version: str
    resolved_version: str
    requested_by: str
    risk_level: RiskLevel | None = None
    risk_reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "coordinate": self.coordinate,
            "requestedVersion": self.requested_version,
            "resolvedVersion": self.resolved_version,
            "requestedBy": self.requested_by,
        }
        if self.risk_level is not None:
            data["riskLevel"] = self.risk_level.value
        if self.risk_reason is not None:
            data["riskReason"] = self.risk_reason
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DependencyConflict:
        risk = data.get("riskLevel")
        return cls(
            coordinate=_require(data, "coordinate"),
            requested_version=_require(data, "requestedVersion"),
            resolved_version=_require(data, "resolvedVersion"),
            requested_by=_require(data, "requestedBy"),
            risk_level=RiskLevel(risk) if risk is not None else None,
            risk_reason=data.get("riskReason"),
        )


@dataclass
class DependencyTree:
    """The dependency tree of one project and configuration."""

    project_name: str
    configuration: GradleConfiguration
    roots: list[DependencyNode] = field(default_factory=list)
    conflicts: list[DependencyConflict] = field(default_factory=list)

    def total_node_count(self) -> int:
        return sum(root.subtree_size() for root in self.roots)

    def max_depth(self) -> int:
        def depth(node: DependencyNode) -> int:
            return 1 + max((depth(child) for child in node.children), default=0)

        return max((depth(root) for root in self.roots), default=0)

    def assign_ids(self) -> None:
        for root in self.roots:
            root.assign_ids()

    def to_dict(self) -> dict[str, Any]:
        return {
            "projectName": self.project_name,
            "configuration": self.configuration.value,
            "roots": [root.to_dict() for root in self.roots],
            "conflicts": [conflict.to_dict() for conflict in self.conflicts],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DependencyTree:
        tree = cls(
            project_name=_require(data, "projectName"),
            configuration=GradleConfiguration(_require(data, "configuration")),
            roots=[DependencyNode.from_dict(root) for root in _require(data, "roots")],
            conflicts=[DependencyConflict.from_dict(c) for c in _require(data, "conflicts")],
        )
        tree.assign_ids()
        return tree


@dataclass(frozen=True)
class GradleModule:
    """A Gradle sub-project."""

    name: str
    path: str


@dataclass
class FlatDependencyEntry:
    """One coordinate of a tree, with every occurrence folded together."""

    coordinate: str
    group: str
    artifact: str
    version: str
    has_conflict: bool
    is_omitted: bool
    occurrence_count: int
    used_by: list[str] = field(default_factory=list)
    versions: set[str] = field(default_factory=set)


@dataclass
class ScopeValidationResult:
    """A test library found on a production configuration."""

    coordinate: str
    version: str
    matched_library: str
    configuration: GradleConfiguration
    recommendation: str


class DuplicateKind(Enum):
    CROSS_MODULE = "crossModule"
    WITHIN_MODULE = "withinModule"


@dataclass
class DuplicateDependencyResult:
    """A dependency declared more than once."""

    coordinate: str
    kind: DuplicateKind
    modules: list[str]
    versions: dict[str, str]
    has_version_mismatch: bool
    recommendation: str


class ChangeKind(Enum):
    ADDED = "added"
    REMOVED = "removed"
    VERSION_CHANGED = "versionChanged"
    UNCHANGED = "unchanged"


@dataclass
class DependencyDiffEntry:
    """How one coordinate changed between two trees."""

    coordinate: str
    change_kind: ChangeKind
    before_version: str | None = None
    after_version: str | None = None
    before_resolved_version: str | None = None
    after_resolved_version: str | None = None

    def effective_before_version(self) -> str | None:
        if self.before_resolved_version is not None:
            return self.before_resolved_version
        return self.before_version

    def effective_after_version(self) -> str | None:
        if self.after_resolved_version is not None:
            return self.after_resolved_version
        return self.after_version


@dataclass
class DependencyDiffResult:
    """The full comparison of a baseline tree against a current tree."""

    baseline_name: str
    current_name: str
    entries: list[DependencyDiffEntry] = field(default_factory=list)

    def _of_kind(self, kind: ChangeKind) -> list[DependencyDiffEntry]:
        return [entry for entry in self.entries if entry.change_kind is kind]

    def added(self) -> list[DependencyDiffEntry]:
        return self._of_kind(ChangeKind.ADDED)

    def removed(self) -> list[DependencyDiffEntry]:
        return self._of_kind(ChangeKind.REMOVED)

    def version_changed(self) -> list[DependencyDiffEntry]:
        return self._of_kind(ChangeKind.VERSION_CHANGED)

    def unchanged(self) -> list[DependencyDiffEntry]:
        return self._of_kind(ChangeKind.UNCHANGED)


@dataclass(frozen=True)
class DependencyDeclaration:
    """A dependency as declared in a build file."""

    configuration: str
    group: str
    artifact: str
    version: str
    line: int


class ReportFormat(Enum):
    TEXT = "text"
    JSON = "json"