# gradle-depcheck

A library for inspecting Gradle dependency trees. You build a
`DependencyTree` out of `DependencyNode` objects (or load one with
`DependencyTree.from_dict`), and the analysis modules report on it.

It can:

- flatten a tree into one entry per `group:artifact` coordinate, with the
  versions seen, how often the coordinate occurs and which parents use it
  (`table_calculator.flat_entries`, `table_calculator.parent_map`)
- sum up a tree: every node, unique coordinates, the largest subtree per
  coordinate and conflicts grouped by coordinate (`tree_analysis.all_nodes`,
  `unique_coordinates`, `subtree_sizes`, `conflicts_by_coordinate`)
- compare two trees and label each coordinate as added, removed, version
  changed or unchanged (`diff_calculator.diff`, returning a
  `DependencyDiffResult` with `added()`, `removed()`, `version_changed()` and
  `unchanged()`)
- join the trees of several modules into one project tree, with one
  synthetic root per module whose requested version is `"module"`
  (`multi_module_assembler.assemble`)
- find test libraries such as JUnit, Mockito or Testcontainers on a
  production configuration (`scope_validator.validate`,
  `scope_validator.match_test_library`)
- give each version conflict a risk level from `INFO` to `CRITICAL`
  (`risk_calculator.assess_conflicts`, with `parse_semver` and
  `strip_qualifiers` for version handling)
- find dependencies that two or more module roots depend on directly, and
  flag differing versions (`duplicate_detector.detect_cross_module`)

## Installation

```
pip install gradle-depcheck
```

## Example

```python
from gradle_depcheck.models import (
    DependencyConflict,
    DependencyNode,
    DependencyTree,
    GradleConfiguration,
)
from gradle_depcheck import table_calculator, scope_validator

guava = DependencyNode("com.google.guava", "guava", "30.0-jre")
guava.resolved_version = "31.1-jre"
junit = DependencyNode("junit", "junit", "4.13.2")
root = DependencyNode("org.springframework", "spring-core", "5.3.20")
root.children = [guava, junit]

tree = DependencyTree(
    project_name="demo",
    configuration=GradleConfiguration.COMPILE_CLASSPATH,
    roots=[root],
    conflicts=[
        DependencyConflict(
            coordinate="com.google.guava:guava",
            requested_version="30.0-jre",
            resolved_version="31.1-jre",
            requested_by="org.springframework:spring-core",
        )
    ],
)

for entry in table_calculator.flat_entries(tree):
    print(entry.coordinate, entry.version, entry.has_conflict)

for finding in scope_validator.validate(tree):
    print(finding.coordinate, finding.matched_library, finding.recommendation)
```

## Configurations

`GradleConfiguration` lists the configurations the analyses know about, such
as `compileClasspath` and `testRuntimeClasspath`.
`GradleConfiguration.from_name("runtimeClasspath")` returns the member, or
`None` for an unknown name. `is_production()` is true for `compileClasspath`,
`runtimeClasspath`, `implementation`, `runtimeOnly`, `compileOnly` and `api`;
scope validation only runs on those, and risk assessment lowers the risk on
the others.

## Risk assessment

`risk_calculator.assess_conflicts(tree, runner, project_path)` returns the
tree's conflicts with `risk_level` and `risk_reason` set, from how far apart
the requested and resolved versions are:

- a different major version is `HIGH`
- a different minor version is `MEDIUM`
- a different patch version is `LOW`
- a change in qualifier only is `INFO`

A conflict managed by a BOM goes down one level, a downgrade goes up one, and
a non-production configuration goes down one. If a version cannot be parsed,
the conflict starts at `MEDIUM`.

The `runner` argument is any object with a method
`run_dependency_insight(project_path, coordinate, configuration)` that
returns Gradle's `dependencyInsight` output as a string. A coordinate counts
as BOM-managed when the first line of that output contains
`(selected by rule)` or `(by constraint)`. When the method raises
`errors.RunnerError`, a conflict counts as BOM-managed only if the tree holds
a constraint node with the same coordinate at the resolved version.

## Serialisation

`DependencyTree.to_dict()` and `DependencyTree.from_dict()` convert a tree to
and from plain dictionaries with camelCase keys (`projectName`,
`requestedVersion`, `isOmitted`, ...) and configuration names such as
`compileClasspath`, ready for the standard `json` module. `from_dict` raises
`ValueError` when a required field is missing and gives every node a fresh id.

## Errors

`gradle_depcheck.errors` holds the exception hierarchy, rooted at
`DependencyCheckError`: `ParseError`, `DependencyImportError`, `RunnerError`
(with `GradlewNotFoundError`, `ExecutionFailedError` and `LaunchFailedError`)
and `ExportError`.

## What this package does not do

It does not run Gradle and does not parse Gradle's text output into a tree;
you supply the tree and, for risk assessment, the runner object. There is no
command-line tool, no text or JSON report writer, and no reading of
`build.gradle` files, so duplicates declared twice within one module's build
file are not detected.